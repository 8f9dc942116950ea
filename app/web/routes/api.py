from __future__ import annotations

import io
import json
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse, StreamingResponse
from sqlalchemy.orm import Session

from app.application import api as app_api
from app.domain.scenarios import ScenarioCatalog
from app.domain.typology import FAMILIES, METRICS, TYPES
from app.infrastructure.exceptions import (
    Equip360Error,
    ResultNotFoundError,
    UnknownScenarioError,
)
from app.utils.exports import make_json_export_payload, make_xlsx_export_bytes
from app.web.dependencies import get_db_session, get_scenario_catalog
from app.web.schemas import (
    AssessmentCreateRequest,
    AssessmentOut,
    AssessmentSaveResponse,
    FamilyInfo,
    InsightsOut,
    MetricInfo,
    ScenarioOut,
    ScoreBreakdownOut,
    ScoringRequest,
    ScoringResponse,
    TeamSummaryOut,
    TypeInfo,
    TypologyResponse,
)

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)


def _to_http_error(exc: Equip360Error) -> HTTPException:
    if isinstance(exc, ResultNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.user_message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.user_message)


def _organization_results(db: Session, organization_id: str):
    try:
        records = app_api.list_organization_results(db, organization_id)
    except Equip360Error as exc:
        raise _to_http_error(exc) from exc
    return [app_api.record_to_result(record) for record in records]


@router.get("/health")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/scenarios", response_model=list[ScenarioOut])
def list_scenarios(catalog: ScenarioCatalog = Depends(get_scenario_catalog)) -> list[ScenarioOut]:
    return [ScenarioOut.from_domain(scenario) for scenario in catalog]


@router.get("/scenarios/{scenario_id}", response_model=ScenarioOut)
def get_scenario(
    scenario_id: str, catalog: ScenarioCatalog = Depends(get_scenario_catalog)
) -> ScenarioOut:
    try:
        scenario = catalog.get_required(scenario_id)
    except UnknownScenarioError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.user_message) from exc
    return ScenarioOut.from_domain(scenario)


@router.post("/scoring", response_model=ScoringResponse)
def score_answers(
    payload: ScoringRequest, catalog: ScenarioCatalog = Depends(get_scenario_catalog)
) -> ScoringResponse:
    try:
        scored = app_api.score_answers([a.model_dump() for a in payload.answers], catalog)
    except Equip360Error as exc:
        raise _to_http_error(exc) from exc
    return ScoringResponse(
        answered=len(scored.responses),
        scores=ScoreBreakdownOut.from_domain(scored.scores),
        leadership_family=scored.leadership_family.value,
        leadership_type=scored.leadership_type.value,
    )


@router.get("/typology", response_model=TypologyResponse)
def get_typology() -> TypologyResponse:
    return TypologyResponse(
        metrics=[
            MetricInfo(
                code=m.code.name,
                name=m.name,
                full_name=m.full_name,
                description=m.description,
                category=m.category.value,
            )
            for m in METRICS.values()
        ],
        families=[
            FamilyInfo(
                code=f.code.value,
                name=f.name,
                tagline=f.tagline,
                description=f.description,
                color=f.color,
            )
            for f in FAMILIES.values()
        ],
        types=[
            TypeInfo(
                code=t.code.value,
                name=t.name,
                family=t.family.value,
                tagline=t.tagline,
                description=t.description,
                strengths=list(t.strengths),
                blind_spots=list(t.blind_spots),
                stress_behaviors=list(t.stress_behaviors),
                best_utilization=t.best_utilization,
            )
            for t in TYPES.values()
        ],
    )


@router.post(
    "/assessments", response_model=AssessmentSaveResponse, status_code=status.HTTP_201_CREATED
)
def create_assessment(
    payload: AssessmentCreateRequest,
    db: Session = Depends(get_db_session),
    catalog: ScenarioCatalog = Depends(get_scenario_catalog),
) -> AssessmentSaveResponse:
    try:
        result, responses = app_api.result_from_answers(
            payload.user_id,
            [a.model_dump() for a in payload.answers],
            session_id=payload.session_id,
            catalog=catalog,
        )
    except Equip360Error as exc:
        raise _to_http_error(exc) from exc

    # A failed save still returns the computed result.
    outcome = app_api.save_assessment_result(
        db, result, organization_id=payload.organization_id, responses=responses
    )
    return AssessmentSaveResponse(
        saved=outcome.success,
        assessment_id=outcome.assessment_id,
        error=outcome.error,
        result=AssessmentOut.from_domain(result),
    )


@router.get("/assessments/{assessment_id}", response_model=AssessmentOut)
def get_assessment(assessment_id: str, db: Session = Depends(get_db_session)) -> AssessmentOut:
    try:
        record = app_api.get_assessment_result(db, assessment_id)
    except Equip360Error as exc:
        raise _to_http_error(exc) from exc
    return AssessmentOut.from_domain(app_api.record_to_result(record))


@router.get("/assessments/{assessment_id}/insights", response_model=InsightsOut)
def get_assessment_insights(
    assessment_id: str, db: Session = Depends(get_db_session)
) -> InsightsOut:
    try:
        record = app_api.get_assessment_result(db, assessment_id)
    except Equip360Error as exc:
        raise _to_http_error(exc) from exc
    result = app_api.record_to_result(record)
    return InsightsOut.from_domain(result.id, app_api.insights_for_result(result))


@router.get("/users/{user_id}/assessments", response_model=list[AssessmentOut])
def list_user_assessments(
    user_id: str,
    limit: int | None = Query(default=None, ge=1, le=500),
    db: Session = Depends(get_db_session),
) -> list[AssessmentOut]:
    try:
        records = app_api.list_user_results(db, user_id, limit=limit)
    except Equip360Error as exc:
        raise _to_http_error(exc) from exc
    return [AssessmentOut.from_domain(app_api.record_to_result(r)) for r in records]


@router.get("/organizations/{organization_id}/assessments", response_model=list[AssessmentOut])
def list_organization_assessments(
    organization_id: str, db: Session = Depends(get_db_session)
) -> list[AssessmentOut]:
    return [AssessmentOut.from_domain(r) for r in _organization_results(db, organization_id)]


@router.get("/organizations/{organization_id}/summary", response_model=TeamSummaryOut)
def get_team_summary(organization_id: str, db: Session = Depends(get_db_session)) -> TeamSummaryOut:
    summary = app_api.summarize_team_results(_organization_results(db, organization_id))
    return TeamSummaryOut(
        organization_id=organization_id,
        completed_count=summary.completed_count,
        family_distribution=summary.family_distribution,
        type_distribution=summary.type_distribution,
        metric_averages=summary.metric_averages,
        metric_percentages=summary.metric_percentages,
        overall_percentage=summary.overall_percentage,
        strengths=summary.strengths,
        growth_areas=summary.growth_areas,
    )


@router.get("/organizations/{organization_id}/exports/json")
def export_organization_json(
    organization_id: str, db: Session = Depends(get_db_session)
) -> JSONResponse:
    results = _organization_results(db, organization_id)
    payload_str = make_json_export_payload(organization_id, results)
    payload = json.loads(payload_str)
    return JSONResponse(content=payload)


@router.get("/organizations/{organization_id}/exports/xlsx")
def export_organization_xlsx(
    organization_id: str, db: Session = Depends(get_db_session)
) -> StreamingResponse:
    results = _organization_results(db, organization_id)
    try:
        xlsx_bytes = make_xlsx_export_bytes(results)
    except Equip360Error as exc:
        logger.exception("XLSX export failed for organization %s", organization_id)
        raise _to_http_error(exc) from exc
    filename = f"equip360_{organization_id}.xlsx"
    stream = io.BytesIO(xlsx_bytes)
    stream.seek(0)
    headers = {"Content-Disposition": f"attachment; filename={filename}"}
    return StreamingResponse(
        stream,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers=headers,
    )
