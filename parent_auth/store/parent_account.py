"""
Parent account repository.

Accounts are keyed by uuid in the "parent_auths" table. Identifiers freed by
removed accounts are kept in "reclaimed_uuids" and handed out again before
new ones are generated.
"""

import logging

from ..errors import EntryDuplicateError, InvalidModelError, RowNotExistError
from ..models import ParentAccount
from .tx import TxContext

logger = logging.getLogger(__name__)

TABLE = "parent_auths"
POOL = "reclaimed_uuids"


class ParentAuthRepository:
    """Reads and writes ParentAccount records inside a transaction."""

    def _validate(self, account: ParentAccount):
        if not account.uuid:
            raise InvalidModelError("uuid is required")
        if not account.login_id:
            raise InvalidModelError("login_id is required")
        if not account.password:
            raise InvalidModelError("password is required")
        if not account.name:
            raise InvalidModelError("name is required")

    def get_by_login_id(self, tx: TxContext, login_id: str) -> ParentAccount:
        """
        Get account by login ID.

        Raises:
            RowNotExistError: If no account uses the login ID
        """
        for data in tx.table(TABLE).values():
            if data.get("login_id") == login_id:
                return ParentAccount.from_dict(data)
        raise RowNotExistError(f"no parent account with id {login_id}")

    def get_available_uuid(self, tx: TxContext) -> str:
        """
        Take an identifier from the reclaimed pool.

        Pool entries already used by an account are discarded.

        Returns:
            A reusable uuid (removed from the pool)

        Raises:
            RowNotExistError: If the pool has no usable identifier
        """
        pool = tx.table(POOL)
        accounts = tx.table(TABLE)

        while pool:
            candidate = pool.pop(0)
            if candidate in accounts:
                logger.warning(f"Discarding reclaimed uuid {candidate}: already in use")
                continue
            return candidate

        raise RowNotExistError("no reclaimed uuid available")

    def reclaim_uuid(self, tx: TxContext, uuid: str):
        """
        Add an identifier to the reclaimed pool.

        Raises:
            InvalidModelError: If uuid is empty
            EntryDuplicateError: If the uuid is in use or already pooled
        """
        if not uuid:
            raise InvalidModelError("uuid is required")

        pool = tx.table(POOL)
        if uuid in tx.table(TABLE) or uuid in pool:
            raise EntryDuplicateError("uuid")

        pool.append(uuid)

    def store(self, tx: TxContext, account: ParentAccount):
        """
        Insert a new account.

        Raises:
            InvalidModelError: If the account fails validation
            EntryDuplicateError: "id" if the login ID is taken,
                "uuid" if the identifier is taken
        """
        self._validate(account)

        table = tx.table(TABLE)
        if any(data.get("login_id") == account.login_id for data in table.values()):
            raise EntryDuplicateError("id")
        if account.uuid in table:
            raise EntryDuplicateError("uuid")

        table[account.uuid] = account.to_dict()
        logger.debug(f"Stored parent account {account.uuid}")
