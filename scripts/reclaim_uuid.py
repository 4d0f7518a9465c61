#!/usr/bin/env python3
"""
Script to put parent identifiers back into the reclaimed pool.

Sign-up hands out pooled identifiers before generating new ones.

Usage:
    python scripts/reclaim_uuid.py parent-0a1b2c3d4e5f

    # Several at once, on a specific store file:
    python scripts/reclaim_uuid.py -f data/parent_auth.json parent-0a1b2c3d4e5f parent-ffeeddccbbaa
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from parent_auth.config import load_config
from parent_auth.errors import StoreError, TxError
from parent_auth.store import JSONTxHandler, ParentAuthRepository


def main():
    parser = argparse.ArgumentParser(description="Add identifiers to the reclaimed uuid pool")
    parser.add_argument("uuids", nargs="+", help="Identifiers to reclaim")
    parser.add_argument("--data-file", "-f", type=Path, help="Store file (default: DATA_FILE from env)")
    args = parser.parse_args()

    config = load_config()
    tx_handler = JSONTxHandler(
        args.data_file or config.store.data_file,
        lock_timeout=config.store.lock_timeout_seconds
    )
    repo = ParentAuthRepository()

    try:
        tx = tx_handler.begin_tx()
    except TxError as e:
        print(f"❌ Failed to open store: {e}")
        sys.exit(1)

    try:
        for uuid in args.uuids:
            repo.reclaim_uuid(tx, uuid)
    except StoreError as e:
        tx_handler.rollback(tx)
        print(f"❌ Failed to reclaim {uuid}: {e}")
        sys.exit(1)

    try:
        tx_handler.commit(tx)
    except TxError as e:
        print(f"❌ Failed to save store: {e}")
        sys.exit(1)

    print(f"✅ Reclaimed {len(args.uuids)} uuid(s)")
    for uuid in args.uuids:
        print(f"   {uuid}")


if __name__ == "__main__":
    main()
