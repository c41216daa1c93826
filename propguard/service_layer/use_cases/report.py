# propguard/service_layer/use_cases/report.py
from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from ...adapters.sqlalchemy_repos import SqlAlchemyRepos
from ...domain.address import is_blank, parse_free_text_address
from ...domain.errors import ValidationError
from ..results import UseCaseResult, run_in_uow
from ..unit_of_work import SqlAlchemyUnitOfWork

REPORT_CONFIRMATION = "Report submitted successfully. Thank you for helping keep the community safe!"


@dataclass(frozen=True)
class ReportReceipt:
    report_id: str
    property_id: str
    message: str = REPORT_CONFIRMATION


async def report_scam(
    session: AsyncSession,
    *,
    user_id: str,
    scam_type: str | None,
    description: str | None,
    property_id: str | None = None,
    address: str | None = None,
    evidence: list[str] | None = None,
    listing_url: str | None = None,  # reserved
) -> UseCaseResult[ReportReceipt]:
    """
    Report a scam against a property id, or against a free-text
    "address, city, state" which is resolved (and created if new) first.

    Flag bookkeeping happens once, inside ReportRepository.file(); a property
    created here starts out like any other and is flagged by the report itself.
    """

    async def _work(repos: SqlAlchemyRepos) -> ReportReceipt:
        if is_blank(scam_type) or is_blank(description):
            raise ValidationError("scam_type and description are required")

        target_id = (property_id or "").strip() or None
        if target_id is None:
            parsed = parse_free_text_address(address)
            if parsed is None:
                raise ValidationError("property_id or a valid address is required")
            addr, city, state = parsed
            prop = await repos.properties.resolve(addr, city, state)
            target_id = prop.id

        report = await repos.reports.file(
            property_id=target_id,
            reported_by=user_id,
            scam_type=scam_type,
            description=description,
            evidence=evidence,
        )
        return ReportReceipt(report_id=report.id, property_id=target_id)

    return await run_in_uow("report_scam", SqlAlchemyUnitOfWork(session), _work)
