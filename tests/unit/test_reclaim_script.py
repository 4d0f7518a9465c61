"""
Unit tests for the reclaim_uuid maintenance script.
"""

import importlib.util
from pathlib import Path
from unittest.mock import patch

import pytest

SCRIPT_PATH = Path(__file__).parent.parent.parent / "scripts" / "reclaim_uuid.py"


@pytest.fixture
def reclaim_script():
    spec = importlib.util.spec_from_file_location("reclaim_uuid", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestReclaimScript:

    @pytest.mark.unit
    def test_reclaims_into_pool(self, reclaim_script, data_file, tx_handler, parent_auth_repo, capsys):
        argv = ["reclaim_uuid.py", "-f", str(data_file), "parent-aaaaaaaaaaaa", "parent-bbbbbbbbbbbb"]
        with patch("sys.argv", argv):
            reclaim_script.main()

        assert "Reclaimed 2 uuid(s)" in capsys.readouterr().out

        tx = tx_handler.begin_tx()
        assert parent_auth_repo.get_available_uuid(tx) == "parent-aaaaaaaaaaaa"
        tx_handler.rollback(tx)

    @pytest.mark.unit
    def test_duplicate_rolls_back(self, reclaim_script, data_file, tx_handler):
        argv = ["reclaim_uuid.py", "-f", str(data_file), "parent-aaaaaaaaaaaa", "parent-aaaaaaaaaaaa"]
        with patch("sys.argv", argv):
            with pytest.raises(SystemExit) as exc_info:
                reclaim_script.main()

        assert exc_info.value.code == 1

        tx = tx_handler.begin_tx()
        assert tx.table("reclaimed_uuids") == []
        tx_handler.rollback(tx)
