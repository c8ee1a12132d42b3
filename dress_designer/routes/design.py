from fastapi import APIRouter, Form, HTTPException, Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from pathlib import Path
from typing import List

from ..models.schemas import (
    DESIGN_TYPE_LABELS,
    DesignRequest,
    DesignType,
    DesignTypeOption,
    RendererState,
)
from ..exceptions import SubmissionFailure, SubmissionInProgressError
from ..services.intake import get_design_intake
from ..services.renderer import get_design_renderer
from ..utils.logger import logger

router = APIRouter(tags=["design"])

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

DESIGN_TYPE_OPTIONS = [
    DesignTypeOption(id=design_type, label=label)
    for design_type, label in DESIGN_TYPE_LABELS.items()
]


def render_page(request: Request, status_code: int = 200):
    """폼 + 디스플레이 전체 페이지"""
    intake = get_design_intake()
    renderer = get_design_renderer()
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "form": intake.form,
            "submit_status": intake.status.value,
            "is_submitting": intake.is_submitting,
            "submit_error": intake.last_error,
            "design_types": DESIGN_TYPE_OPTIONS,
            **renderer.view(),
        },
        status_code=status_code,
    )


@router.get("/")
async def home(request: Request):
    """홈페이지"""
    return render_page(request)


@router.post("/designer/submit")
async def submit_design(
    request: Request,
    design_type: DesignType = Form(..., alias="designType"),
    color: str = Form(..., pattern=r"^#[0-9a-fA-F]{6}$"),
    style: str = Form(..., min_length=1),
    weight: float = Form(..., ge=30, le=200),
    height: float = Form(..., ge=100, le=250),
):
    """폼 전송 -> 외부 디자인 서비스 요청"""
    intake = get_design_intake()

    if intake.is_submitting:
        logger.warning("Duplicate submission rejected")
        raise HTTPException(status_code=409, detail="이미 디자인 요청을 처리 중입니다.")

    intake.update_form(design_type=design_type, color=color, style=style, weight=weight, height=height)
    design_request = DesignRequest(
        design_type=design_type,
        color=color,
        style=style,
        weight=weight,
        height=height
    )

    try:
        await intake.submit(design_request)
    except SubmissionInProgressError:
        raise HTTPException(status_code=409, detail="이미 디자인 요청을 처리 중입니다.")
    except SubmissionFailure:
        # 폼 값을 유지한 채 에러 메시지와 함께 다시 표시
        return render_page(request, status_code=502)
    except Exception as e:
        logger.error(f"Unexpected submission error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"디자인 요청 실패: {str(e)}")

    return render_page(request)


@router.get("/designer/display")
async def display(request: Request):
    """디자인 표시 영역만 반환"""
    return templates.TemplateResponse(request, "_display.html", get_design_renderer().view())


@router.post("/designer/retry")
async def retry_design():
    """에러 해제 후 다시 시도"""
    get_design_renderer().retry()
    return RedirectResponse(url="/", status_code=303)


@router.get("/api/designer/state")
async def renderer_state():
    """렌더러 상태 (JSON)"""
    state: RendererState = get_design_renderer().state()
    return state.model_dump(mode="json", by_alias=True)


@router.get("/api/design-types", response_model=List[DesignTypeOption])
async def get_design_types():
    """선택 가능한 드레스 종류 목록"""
    return DESIGN_TYPE_OPTIONS
