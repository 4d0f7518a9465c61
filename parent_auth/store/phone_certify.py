"""
Phone certification repository.

Records are keyed by phone number in the "phone_certifications" table.
"""

import logging

from ..errors import EntryDuplicateError, InvalidModelError, RowNotExistError
from ..models import PhoneCertification, CERTIFY_CODE_MIN, CERTIFY_CODE_MAX
from .tx import TxContext

logger = logging.getLogger(__name__)

TABLE = "phone_certifications"


class PhoneCertifyRepository:
    """Reads and writes PhoneCertification records inside a transaction."""

    def _validate(self, cert: PhoneCertification):
        if not cert.phone_number or not cert.phone_number.isdigit():
            raise InvalidModelError(f"phone_number must be digits, got {cert.phone_number!r}")
        if not CERTIFY_CODE_MIN <= cert.certify_code <= CERTIFY_CODE_MAX:
            raise InvalidModelError(f"certify_code out of range: {cert.certify_code}")
        if cert.certified not in (None, True, False):
            raise InvalidModelError(f"certified must be a bool or None, got {cert.certified!r}")

    def get_by_phone_number(self, tx: TxContext, phone_number: str) -> PhoneCertification:
        """
        Get certification record by phone number.

        Raises:
            RowNotExistError: If no record exists for the number
        """
        data = tx.table(TABLE).get(phone_number)
        if data is None:
            raise RowNotExistError(f"no certification for phone number {phone_number}")
        return PhoneCertification.from_dict(data)

    def store(self, tx: TxContext, cert: PhoneCertification):
        """
        Insert a new certification record.

        Raises:
            InvalidModelError: If the record fails validation
            EntryDuplicateError: If the phone number already has a record
        """
        self._validate(cert)

        table = tx.table(TABLE)
        if cert.phone_number in table:
            raise EntryDuplicateError("phone_number")

        table[cert.phone_number] = cert.to_dict()
        logger.debug(f"Stored certification for {cert.phone_number}")

    def update(self, tx: TxContext, cert: PhoneCertification):
        """
        Replace an existing certification record.

        Raises:
            InvalidModelError: If the record fails validation
            RowNotExistError: If the phone number has no record
        """
        self._validate(cert)

        table = tx.table(TABLE)
        if cert.phone_number not in table:
            raise RowNotExistError(f"no certification for phone number {cert.phone_number}")

        table[cert.phone_number] = cert.to_dict()
        logger.debug(f"Updated certification for {cert.phone_number}")
