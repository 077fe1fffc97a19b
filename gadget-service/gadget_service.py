# gadget_service.py
import hmac
import logging
from typing import List, NamedTuple, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from codenames import CodenameGenerator, SELF_DESTRUCT_ELIGIBLE, can_self_destruct, default_generator
from errors import (
    CodenameGenerationError,
    GadgetNotFound,
    InvalidConfirmationCode,
    InvalidStatus,
    InvalidStatusForSelfDestruct,
    MissingName,
)
from models import GadgetDB, GadgetStatus, VALID_STATUSES, utcnow

logger = logging.getLogger(__name__)

MAX_CODENAME_ATTEMPTS = 10


def probability_text(gadget: GadgetDB) -> str:
    return f"{gadget.codename} - {gadget.mission_success_probability}% success probability"


class SelfDestructResult(NamedTuple):
    # Exactly one of the two is set: the code after phase 1, the gadget after phase 2.
    confirmation_code: Optional[str] = None
    gadget: Optional[GadgetDB] = None


class GadgetService:
    def __init__(self, db: AsyncSession, generator: Optional[CodenameGenerator] = None):
        self.db = db
        self.generator = generator or default_generator

    async def list_gadgets(self, status: Optional[str] = None) -> List[GadgetDB]:
        query = select(GadgetDB)
        if status:
            query = query.where(GadgetDB.status == status)
        result = await self.db.execute(query.order_by(GadgetDB.created_at.desc()))
        return list(result.scalars().all())

    async def get_gadget(self, gadget_id: str) -> GadgetDB:
        result = await self.db.execute(select(GadgetDB).where(GadgetDB.id == gadget_id))
        gadget = result.scalar_one_or_none()
        if gadget is None:
            raise GadgetNotFound()
        return gadget

    async def codename_taken(self, codename: str) -> bool:
        result = await self.db.execute(select(GadgetDB.id).where(GadgetDB.codename == codename))
        return result.first() is not None

    async def generate_unique_codename(self) -> str:
        """
        Draws codenames until one is free, switching between the primary
        and the alternative strategy after every collision.
        """
        for attempt in range(MAX_CODENAME_ATTEMPTS):
            if attempt % 2 == 0:
                codename = self.generator.generate_codename()
            else:
                codename = self.generator.generate_alternative_codename()
            if not await self.codename_taken(codename):
                return codename
            logger.debug(f"Codename collision on {codename!r} (attempt {attempt + 1})")
        logger.error(f"No free codename after {MAX_CODENAME_ATTEMPTS} attempts")
        raise CodenameGenerationError()

    async def create_gadget(self, name: Optional[str], description: Optional[str] = None) -> GadgetDB:
        if not name:
            raise MissingName()

        codename = await self.generate_unique_codename()
        gadget = GadgetDB(
            name=name,
            codename=codename,
            description=description or self.generator.generate_description(codename),
            mission_success_probability=self.generator.generate_mission_success_probability(),
            status=GadgetStatus.AVAILABLE.value,
        )
        self.db.add(gadget)
        try:
            await self.db.commit()
        except IntegrityError:
            # A concurrent create claimed the codename between the check and the insert.
            await self.db.rollback()
            raise CodenameGenerationError()
        await self.db.refresh(gadget)
        logger.info(f"Gadget created: {gadget.codename} ({gadget.name})")
        return gadget

    async def update_gadget(
        self,
        gadget_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        status: Optional[str] = None,
    ) -> GadgetDB:
        gadget = await self.get_gadget(gadget_id)

        if status and status not in VALID_STATUSES:
            raise InvalidStatus(validStatuses=VALID_STATUSES)

        if name:
            gadget.name = name
        if description:
            gadget.description = description
        if status:
            gadget.status = status

        await self.db.commit()
        await self.db.refresh(gadget)
        return gadget

    async def decommission_gadget(self, gadget_id: str) -> GadgetDB:
        gadget = await self.get_gadget(gadget_id)
        gadget.status = GadgetStatus.DECOMMISSIONED.value
        gadget.decommissioned_at = utcnow()
        await self.db.commit()
        await self.db.refresh(gadget)
        logger.info(f"Gadget decommissioned: {gadget.codename}")
        return gadget

    async def self_destruct(self, gadget_id: str, confirmation_code: Optional[str] = None) -> SelfDestructResult:
        gadget = await self.get_gadget(gadget_id)

        if not confirmation_code:
            if not can_self_destruct(gadget.status):
                raise InvalidStatusForSelfDestruct(
                    currentStatus=gadget.status,
                    allowedStatuses=list(SELF_DESTRUCT_ELIGIBLE),
                )
            # In a real deployment the code would travel over a secure channel.
            gadget.self_destruct_code = self.generator.generate_self_destruct_code()
            await self.db.commit()
            logger.info(f"Self-destruct sequence initiated for {gadget.codename}")
            return SelfDestructResult(confirmation_code=gadget.self_destruct_code)

        # Eligibility is not re-checked here: holding a stored code implies phase 1 passed.
        stored_code = gadget.self_destruct_code
        if stored_code is None or not hmac.compare_digest(stored_code.encode(), confirmation_code.encode()):
            logger.warning(f"Invalid self-destruct confirmation code for {gadget.codename}")
            raise InvalidConfirmationCode()

        gadget.status = GadgetStatus.DESTROYED.value
        gadget.self_destruct_at = utcnow()
        gadget.self_destruct_code = None
        await self.db.commit()
        await self.db.refresh(gadget)
        logger.info(f"Self-destruct sequence completed for {gadget.codename}")
        return SelfDestructResult(gadget=gadget)
