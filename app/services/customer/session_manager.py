import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.core.exceptions import (
    AlreadyExistsError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthorizedError,
    missing_required,
)
from app.core.security import CredentialVerifier, generate_session_token
from app.models.customer.customer import Customer
from app.schemas.customer.customer import CustomerResponse, SignInResult
from app.schemas.session.session import SessionData
from app.services.customer.customer_service import CustomerService
from app.services.session.session_store import SessionStore

logger = logging.getLogger(__name__)


def _customer_pk(customer_id) -> Optional[int]:
    try:
        return int(customer_id)
    except (TypeError, ValueError):
        return None


class CustomerSessionManager:
    """Sign-up, sign-in and sign-out for customers.

    A sign-in writes the token to the session store and then prepends it to
    ``Customer.sessions``, dropping recorded tokens the store has expired; a
    sign-out deletes it from the store and then drops it from the list. The
    two writes are sequential, not transactional: if the second one fails the
    list and the store disagree until the next sign-in or sign-out. That
    failure is logged as a warning and the error propagates.
    """

    def __init__(
        self,
        customers: CustomerService,
        store: SessionStore,
        verifier: CredentialVerifier,
    ):
        self.customers = customers
        self.store = store
        self.verifier = verifier

    async def sign_up(self, email: Optional[str], password: Optional[str]) -> CustomerResponse:
        missing_required(email=email, password=password)

        if await self.customers.get_customer_by_email(email):
            raise AlreadyExistsError("Email already exists")

        hashed_password = self.verifier.hash(password)
        try:
            customer = await self.customers.create_customer(email, hashed_password)
        except IntegrityError:
            # Lost a race against a concurrent sign-up for the same email
            await self.customers.db.rollback()
            raise AlreadyExistsError("Email already exists")

        logger.info(f"Customer {customer.id} signed up")
        return CustomerResponse.model_validate(customer)

    async def sign_in(self, email: Optional[str], password: Optional[str]) -> SignInResult:
        missing_required(email=email, password=password)

        customer = await self.customers.get_customer_by_email(email)
        if not customer:
            raise NotFoundError("Customer not found")

        if not self.verifier.verify(customer.hashed_password, password):
            raise InvalidCredentialsError()

        token = generate_session_token()
        await self.store.set(token, SessionData(customer_id=str(customer.id)))

        sessions = [token] + await self._live_tokens(customer)
        try:
            customer = await self.customers.update_sessions(customer, sessions)
        except SQLAlchemyError:
            logger.warning(
                f"Session stored but customer {customer.id} session list not updated"
            )
            raise

        logger.info(f"Customer {customer.id} signed in ({len(sessions)} live sessions)")
        return SignInResult(customer=CustomerResponse.model_validate(customer), token=token)

    async def sign_out(self, customer_id: Optional[str], token: Optional[str]) -> None:
        """Revoke token. Unknown or already revoked tokens are not an error."""
        if not token:
            return

        await self.store.delete(token)

        customer = await self._find_customer(customer_id)
        if customer is None:
            return

        sessions = list(customer.sessions or [])
        if token not in sessions:
            return

        try:
            await self.customers.update_sessions(customer, [t for t in sessions if t != token])
        except SQLAlchemyError:
            logger.warning(
                f"Session deleted but customer {customer.id} session list not updated"
            )
            raise

        logger.info(f"Customer {customer.id} signed out")

    async def resolve_identity(self, customer_id: str) -> CustomerResponse:
        customer = await self._find_customer(customer_id)
        if customer is None:
            raise UnauthorizedError()
        return CustomerResponse.model_validate(customer)

    async def _live_tokens(self, customer: Customer) -> List[str]:
        """Recorded tokens the store still resolves; expired ones are dropped"""
        live = []
        for recorded in customer.sessions or []:
            if await self.store.get(recorded) is not None:
                live.append(recorded)
        return live

    async def _find_customer(self, customer_id) -> Optional[Customer]:
        pk = _customer_pk(customer_id)
        if pk is None:
            return None
        return await self.customers.get_customer(pk)
