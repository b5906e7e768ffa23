"""
DesignRepository for saved design drafts
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from database_models import Design


class DesignRepository:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def save(self, student_id: str, design_type: str, design_data: str = "") -> int:
        design = Design(
            student_id=student_id,
            design_type=design_type,
            design_data=design_data or "",
        )
        self.db.add(design)
        await self.db.flush()
        await self.db.refresh(design)
        return design.id

    async def list_for_student(self, student_id: str) -> List[Design]:
        """Saved designs for a student, newest first."""
        result = await self.db.execute(
            select(Design)
            .where(Design.student_id == student_id)
            .order_by(Design.created_at.desc(), Design.id.desc())
        )
        return list(result.scalars().all())
