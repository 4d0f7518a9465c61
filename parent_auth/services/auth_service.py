"""
Parent authentication service.

Orchestrates phone certification, parent sign-up and login. Every operation
runs in one transaction that is committed on success and rolled back on any
failure. Collaborator errors are translated into usecase errors
(NotFoundError, ConflictError, InternalServerError) before they leave this
module.
"""

import logging
from contextlib import contextmanager
from dataclasses import replace
from datetime import timedelta
from typing import Iterator, Optional, Protocol, Tuple

from ..errors import (
    ConflictCode,
    ConflictError,
    EntryDuplicateError,
    InternalServerError,
    InvalidModelError,
    NotFoundError,
    PasswordMismatchError,
    RowNotExistError,
)
from ..models import ParentAccount, PhoneCertification
from ..store.tx import TxContext, TxOptions

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access_token"
ACCESS_TOKEN_LIFETIME = timedelta(hours=24)

CERTIFY_SMS_TEMPLATE = "[육아는 처음이지 인증 번호]\n회원가입 인증 번호: {code}"


# Collaborator contracts

class TxHandler(Protocol):
    def begin_tx(self, opts: Optional[TxOptions] = None) -> TxContext: ...
    def commit(self, tx: TxContext): ...
    def rollback(self, tx: TxContext): ...


class PhoneCertifyStore(Protocol):
    def get_by_phone_number(self, tx: TxContext, phone_number: str) -> PhoneCertification: ...
    def store(self, tx: TxContext, cert: PhoneCertification): ...
    def update(self, tx: TxContext, cert: PhoneCertification): ...


class ParentAuthStore(Protocol):
    def get_by_login_id(self, tx: TxContext, login_id: str) -> ParentAccount: ...
    def get_available_uuid(self, tx: TxContext) -> str: ...
    def store(self, tx: TxContext, account: ParentAccount): ...


class MessageAgency(Protocol):
    def send_sms_to_one(self, receiver: str, content: str): ...


class HashHandler(Protocol):
    def generate_hash_with_salt(self, password: str) -> str: ...
    def compare_hash_and_password(self, hashed: str, password: str): ...


class TokenHandler(Protocol):
    def generate_uuid_jwt(self, uuid: str, token_type: str, expires_in: timedelta) -> str: ...


class AuthService:
    """
    Service for parent authentication.

    Handles:
    - Sending a certify code to a phone number
    - Certifying a phone number with the code
    - Signing up a parent on a certified phone number
    - Parent login with ID and password
    """

    def __init__(
        self,
        parent_auth_repo: ParentAuthStore,
        phone_certify_repo: PhoneCertifyStore,
        tx_handler: TxHandler,
        message_agency: MessageAgency,
        hash_handler: HashHandler,
        jwt_handler: TokenHandler,
        access_token_lifetime: timedelta = ACCESS_TOKEN_LIFETIME
    ):
        self.parent_auth_repo = parent_auth_repo
        self.phone_certify_repo = phone_certify_repo
        self.tx_handler = tx_handler
        self.message_agency = message_agency
        self.hash_handler = hash_handler
        self.jwt_handler = jwt_handler
        self.access_token_lifetime = access_token_lifetime

    @contextmanager
    def _transaction(self, opts: Optional[TxOptions] = None) -> Iterator[TxContext]:
        """
        Run a block inside one transaction.

        Commits when the block finishes, rolls back when it raises. Each
        transaction is resolved exactly once.
        """
        try:
            tx = self.tx_handler.begin_tx(opts)
        except Exception as e:
            raise InternalServerError("failed to begin transaction", e) from e

        try:
            yield tx
        except BaseException:
            try:
                self.tx_handler.rollback(tx)
            except Exception as rollback_error:
                logger.error(f"Rollback failed: {rollback_error}")
            raise

        try:
            self.tx_handler.commit(tx)
        except Exception as e:
            raise InternalServerError("failed to commit transaction", e) from e

    def send_certify_code_to_phone(self, phone_number: str):
        """
        Issue a new certify code for a phone number and send it by SMS.

        Args:
            phone_number: Phone number to certify

        Raises:
            ConflictError: PHONE_ALREADY_IN_USE if a parent owns the number
            InternalServerError: On unexpected store or SMS failures
        """
        with self._transaction() as tx:
            try:
                cert = self.phone_certify_repo.get_by_phone_number(tx, phone_number)
            except RowNotExistError:
                cert = PhoneCertification(phone_number=phone_number)
                cert.certify_code = cert.generate_certify_code()
                cert.certified = False
                try:
                    self.phone_certify_repo.store(tx, cert)
                except Exception as e:
                    raise InternalServerError("phone store returned unexpected error", e) from e
            except Exception as e:
                raise InternalServerError("get_by_phone_number returned unexpected error", e) from e
            else:
                if cert.is_owned():
                    raise ConflictError("this phone number is already in use", ConflictCode.PHONE_ALREADY_IN_USE)
                cert.certify_code = cert.generate_certify_code()
                cert.certified = False
                try:
                    self.phone_certify_repo.update(tx, cert)
                except Exception as e:
                    raise InternalServerError("phone update returned unexpected error", e) from e

            content = CERTIFY_SMS_TEMPLATE.format(code=cert.certify_code)
            try:
                self.message_agency.send_sms_to_one(cert.phone_number, content)
            except Exception as e:
                raise InternalServerError("send_sms_to_one returned unexpected error", e) from e

        logger.info(f"Certify code sent to {phone_number}")

    def certify_phone_with_code(self, phone_number: str, code: int):
        """
        Mark a phone number as certified if the code matches.

        Args:
            phone_number: Phone number being certified
            code: Certify code received by SMS

        Raises:
            NotFoundError: If no code was ever sent to the number
            ConflictError: PHONE_ALREADY_CERTIFIED or INCORRECT_CERTIFY_CODE
            InternalServerError: On unexpected store failures
        """
        with self._transaction() as tx:
            try:
                cert = self.phone_certify_repo.get_by_phone_number(tx, phone_number)
            except RowNotExistError:
                raise NotFoundError("not exist phone number")
            except Exception as e:
                raise InternalServerError("get_by_phone_number returned unexpected error", e) from e

            if cert.is_certified():
                raise ConflictError("this phone number is already certified", ConflictCode.PHONE_ALREADY_CERTIFIED)
            if code != cert.certify_code:
                raise ConflictError("incorrect certify code to that phone number", ConflictCode.INCORRECT_CERTIFY_CODE)

            cert.certified = True
            try:
                self.phone_certify_repo.update(tx, cert)
            except Exception as e:
                raise InternalServerError("phone update returned unexpected error", e) from e

        logger.info(f"Phone number certified: {phone_number}")

    def sign_up_parent(self, account: ParentAccount, phone_number: str) -> ParentAccount:
        """
        Create a parent account on a certified phone number.

        Args:
            account: New account with a plain text password
            phone_number: Certified phone number the account is bound to

        Returns:
            The stored account (uuid assigned, password hashed)

        Raises:
            ConflictError: UNCERTIFIED_PHONE if the number is missing or not
                certified, PHONE_ALREADY_IN_USE if a parent already owns it,
                PARENT_ID_ALREADY_IN_USE if the login ID is taken
            InternalServerError: On hashing or unexpected store failures
        """
        with self._transaction() as tx:
            # A missing record and an uncertified one get the same answer
            try:
                cert = self.phone_certify_repo.get_by_phone_number(tx, phone_number)
            except RowNotExistError:
                cert = None
            except Exception as e:
                raise InternalServerError("get_by_phone_number returned unexpected error", e) from e

            if cert is None or not cert.is_certified():
                raise ConflictError("this phone number is not certified", ConflictCode.UNCERTIFIED_PHONE)
            if cert.is_owned():
                raise ConflictError("this phone number is already in use", ConflictCode.PHONE_ALREADY_IN_USE)

            try:
                hashed = self.hash_handler.generate_hash_with_salt(account.password)
            except Exception as e:
                raise InternalServerError("failed to generate_hash_with_salt", e) from e

            try:
                uuid = self.parent_auth_repo.get_available_uuid(tx)
            except Exception as e:
                logger.debug(f"No reusable uuid ({e}), generating a new one")
                uuid = ParentAccount.generate_random_uuid()

            stored = replace(account, password=hashed, uuid=uuid)

            try:
                self.parent_auth_repo.store(tx, stored)
            except EntryDuplicateError as e:
                if e.duplicate_key == "id":
                    raise ConflictError("this parent ID is already in use", ConflictCode.PARENT_ID_ALREADY_IN_USE)
                raise InternalServerError("parent auth store returned unexpected duplicate error", e) from e
            except InvalidModelError as e:
                raise InternalServerError("parent auth store returned invalid model", e) from e
            except Exception as e:
                raise InternalServerError("parent auth store returned unexpected error", e) from e

            cert.parent_uuid = stored.uuid
            try:
                self.phone_certify_repo.update(tx, cert)
            except Exception as e:
                raise InternalServerError("phone update returned unexpected error", e) from e

        logger.info(f"Parent signed up: {stored.login_id} ({stored.uuid})")
        return stored

    def login_parent_auth(self, login_id: str, password: str) -> Tuple[str, str]:
        """
        Log a parent in with ID and password.

        Args:
            login_id: Parent login ID
            password: Plain text password

        Returns:
            Tuple of (uuid, access_token)

        Raises:
            ConflictError: NOT_EXIST_PARENT_ID or INCORRECT_PARENT_PW
            InternalServerError: On unexpected store, hash or token failures
        """
        with self._transaction(TxOptions(read_only=True)) as tx:
            try:
                account = self.parent_auth_repo.get_by_login_id(tx, login_id)
            except RowNotExistError:
                raise ConflictError("not exist parent ID", ConflictCode.NOT_EXIST_PARENT_ID)
            except Exception as e:
                raise InternalServerError("get_by_login_id returned unexpected error", e) from e

            try:
                self.hash_handler.compare_hash_and_password(account.password, password)
            except PasswordMismatchError:
                raise ConflictError("incorrect password", ConflictCode.INCORRECT_PARENT_PW)
            except Exception as e:
                raise InternalServerError("compare_hash_and_password returned unexpected error", e) from e

            try:
                token = self.jwt_handler.generate_uuid_jwt(account.uuid, ACCESS_TOKEN_TYPE, self.access_token_lifetime)
            except Exception as e:
                raise InternalServerError("generate_uuid_jwt returned unexpected error", e) from e

        logger.info(f"Parent logged in: {login_id}")
        return account.uuid, token
