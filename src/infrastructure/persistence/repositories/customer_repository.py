"""CustomerRepository - SQLAlchemy implementation of CustomerRepository protocol."""

from uuid import UUID

from sqlalchemy import exists, func, select

from src.domain.entities.customer import Customer
from src.infrastructure.persistence.models.customer import CustomerModel
from src.infrastructure.persistence.repositories.base import SQLAlchemyRepository


class CustomerRepository(SQLAlchemyRepository):
    """SQLAlchemy implementation of CustomerRepository protocol."""

    async def find_by_id(self, customer_id: UUID, studio_id: UUID) -> Customer | None:
        """Find customer by ID within a studio."""
        stmt = select(CustomerModel).where(
            CustomerModel.id == customer_id,
            CustomerModel.studio_id == studio_id,
        )
        model = await self._scalar_one_or_none(stmt)
        if model is None:
            return None

        return self._to_domain(model)

    async def find_by_ids(
        self, customer_ids: set[UUID], studio_id: UUID
    ) -> list[Customer]:
        """Batch lookup (missing ids are skipped, empty input skips the query)."""
        if not customer_ids:
            return []

        stmt = select(CustomerModel).where(
            CustomerModel.id.in_(customer_ids),
            CustomerModel.studio_id == studio_id,
        )
        models = await self._scalars(stmt)

        return [self._to_domain(model) for model in models]

    async def exists_by_email(
        self, studio_id: UUID, email: str, *, exclude_id: UUID | None = None
    ) -> bool:
        """Check if another customer of the studio uses this email."""
        condition = exists().where(
            CustomerModel.studio_id == studio_id,
            func.lower(func.trim(CustomerModel.email)) == email.strip().lower(),
        )
        if exclude_id is not None:
            condition = condition.where(CustomerModel.id != exclude_id)
        result = await self._execute(select(condition))
        return bool(result.scalar_one())

    async def exists_by_phone(self, studio_id: UUID, phone: str) -> bool:
        stmt = select(
            exists().where(
                CustomerModel.studio_id == studio_id,
                func.trim(CustomerModel.phone) == phone.strip(),
            )
        )
        result = await self._execute(stmt)
        return bool(result.scalar_one())

    async def save(self, customer: Customer) -> None:
        """Create or update customer.

        Uses merge semantics - creates if not exists, updates if exists.
        """
        stmt = select(CustomerModel).where(
            CustomerModel.id == customer.id,
            CustomerModel.studio_id == customer.studio_id,
        )
        existing = await self._scalar_one_or_none(stmt)

        if existing is None:
            await self._add(
                CustomerModel(
                    id=customer.id,
                    studio_id=customer.studio_id,
                    first_name=customer.first_name,
                    last_name=customer.last_name,
                    phone=customer.phone,
                    email=customer.email,
                    created_at=customer.created_at,
                    updated_at=customer.updated_at,
                )
            )
            return

        existing.first_name = customer.first_name
        existing.last_name = customer.last_name
        existing.phone = customer.phone
        existing.email = customer.email
        existing.updated_at = customer.updated_at
        await self._flush()

    def _to_domain(self, model: CustomerModel) -> Customer:
        return Customer(
            id=model.id,
            studio_id=model.studio_id,
            first_name=model.first_name,
            last_name=model.last_name,
            phone=model.phone,
            email=model.email,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
