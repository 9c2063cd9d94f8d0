from sqlalchemy.exc import SQLAlchemyError

from storefront.data.models.user import UserModel
from storefront.data.models.shipping_address import ShippingAddressModel
from storefront.domain.results import Err, Ok, Result, ServiceError
from storefront.domain.schemas import ShippingAddressIn, ShippingAddressOut, UserCreate, UserRead
from storefront.repos.address_repo import AddressRepo
from storefront.repos.user_repo import UserRepo
from storefront.utils.db_guard import persistence_guard
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, users: UserRepo, addresses: AddressRepo):
        self.users = users
        self.addresses = addresses

    def create_user(self, payload: UserCreate) -> Result:
        existing = self.users.get_user_by_email(payload.email)
        if existing:
            return Ok(UserRead.model_validate(existing))

        try:
            created = self.users.create_user(UserModel(user_name=payload.user_name, email=payload.email))
        except SQLAlchemyError:
            self.users.rollback()
            logger.exception(f"Failed to create user {payload.email}")
            return Err(ServiceError.persistence("Failed to create user"))

        logger.info(f"Created user {created.id}")
        return Ok(UserRead.model_validate(created))

    @persistence_guard("Failed to read user", "users")
    def get_user(self, user_id: int) -> Result:
        user = self.users.get_user(user_id)
        if not user:
            return Err(ServiceError.not_found("User not found"))
        return Ok(UserRead.model_validate(user))

    @persistence_guard("Failed to create shipping address", "addresses")
    def add_address(self, user_id: int, payload: ShippingAddressIn) -> Result:
        if not self.users.get_user(user_id):
            return Err(ServiceError.not_found("User not found"))

        try:
            created = self.addresses.create_address(
                ShippingAddressModel(user_id=user_id, **payload.model_dump())
            )
        except SQLAlchemyError:
            self.addresses.rollback()
            logger.exception(f"Failed to create shipping address for user {user_id}")
            return Err(ServiceError.persistence("Failed to create shipping address"))

        return Ok(ShippingAddressOut.model_validate(created))

    @persistence_guard("Failed to read shipping addresses", "addresses")
    def list_addresses(self, user_id: int) -> Result:
        if not self.users.get_user(user_id):
            return Err(ServiceError.not_found("User not found"))
        return Ok([ShippingAddressOut.model_validate(a) for a in self.addresses.list_user_addresses(user_id)])

    @persistence_guard("Failed to read shipping address", "addresses")
    def get_address(self, user_id: int, address_id: int) -> Result:
        address = self.addresses.get_user_address(address_id, user_id)
        if not address:
            return Err(ServiceError.not_found("Shipping address not found"))
        return Ok(ShippingAddressOut.model_validate(address))

    @persistence_guard("Failed to update shipping address", "addresses")
    def update_address(self, user_id: int, address_id: int, payload: ShippingAddressIn) -> Result:
        #adres innego uzytkownika traktowany jak nieistniejacy
        address = self.addresses.get_user_address(address_id, user_id)
        if not address:
            return Err(ServiceError.not_found("Shipping address not found"))

        for field, value in payload.model_dump().items():
            setattr(address, field, value)
        self.addresses.commit()

        logger.info(f"Shipping address {address_id} of user {user_id} updated")
        return Ok(ShippingAddressOut.model_validate(address))
