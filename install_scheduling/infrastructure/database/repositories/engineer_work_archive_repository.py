"""Engineer work archive repository implementation."""

from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from install_scheduling.application.interfaces.repositories import (
    EngineerWorkArchiveRepositoryInterface,
)
from install_scheduling.config.logging import get_logger
from install_scheduling.domain.entities.engineer_work_archive import EngineerWorkArchive
from install_scheduling.domain.exceptions.not_found_error import JobNotFoundError
from install_scheduling.domain.value_objects.reset_reason import ResetReason
from install_scheduling.infrastructure.database.models.job import JobModel
from install_scheduling.infrastructure.database.models.scheduling import (
    EngineerUploadModel,
    EngineerWorkArchiveModel,
)

logger = get_logger(__name__)


class EngineerWorkArchiveRepository(EngineerWorkArchiveRepositoryInterface):
    """Engineer work archive repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def archive_engineer_work(
        self,
        job_id: UUID,
        reset_reason: ResetReason,
        scheduled_date_after: Optional[date] = None,
    ) -> EngineerWorkArchive:
        """Snapshot the stored engineer work and uploads of the job."""
        result = await self.db.execute(select(JobModel).where(JobModel.id == job_id))
        job_model = result.scalar_one_or_none()
        if not job_model:
            raise JobNotFoundError(job_id)

        uploads_result = await self.db.execute(
            select(EngineerUploadModel)
            .where(EngineerUploadModel.order_id == job_id)
            .order_by(EngineerUploadModel.uploaded_at)
        )
        uploads = [
            {
                "id": str(upload.id),
                "upload_type": upload.upload_type,
                "file_name": upload.file_name,
                "file_url": upload.file_url,
                "description": upload.description,
                "uploaded_at": upload.uploaded_at.isoformat() if upload.uploaded_at else None,
            }
            for upload in uploads_result.scalars().all()
        ]

        archive_model = EngineerWorkArchiveModel(
            order_id=job_id,
            engineer_id=job_model.engineer_id,
            scheduled_date_before=job_model.scheduled_install_date,
            scheduled_date_after=scheduled_date_after,
            reset_reason=reset_reason.value,
            engineer_notes=job_model.engineer_notes,
            engineer_signature_data=job_model.engineer_signature_data,
            engineer_signed_off_at=job_model.engineer_signed_off_at,
            engineer_status=job_model.engineer_status,
            uploads=uploads,
        )
        self.db.add(archive_model)
        # Use flush instead of commit to maintain transaction atomicity
        await self.db.flush()

        logger.info(
            "Engineer work archived",
            job_id=str(job_id),
            reset_reason=reset_reason.value,
            uploads=len(uploads),
        )
        return self._model_to_entity(archive_model)

    def _model_to_entity(self, model: EngineerWorkArchiveModel) -> EngineerWorkArchive:
        return EngineerWorkArchive(
            id=model.id,
            job_id=model.order_id,
            engineer_id=model.engineer_id,
            reset_reason=ResetReason(model.reset_reason),
            scheduled_date_before=model.scheduled_date_before,
            scheduled_date_after=model.scheduled_date_after,
            engineer_notes=model.engineer_notes,
            engineer_signature_data=model.engineer_signature_data,
            engineer_signed_off_at=model.engineer_signed_off_at,
            engineer_status=model.engineer_status,
            uploads=list(model.uploads or []),
            archived_at=model.archived_at,
        )
