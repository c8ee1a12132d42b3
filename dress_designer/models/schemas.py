from enum import Enum
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Union


class DesignType(str, Enum):
    """드레스 종류"""
    EVENING = "evening"
    CASUAL = "casual"
    COCKTAIL = "cocktail"
    WEDDING = "wedding"
    SUMMER = "summer"
    FORMAL = "formal"

    @property
    def label(self) -> str:
        return DESIGN_TYPE_LABELS[self]


DESIGN_TYPE_LABELS = {
    DesignType.EVENING: "Evening Gown",
    DesignType.CASUAL: "Casual Dress",
    DesignType.COCKTAIL: "Cocktail Dress",
    DesignType.WEDDING: "Wedding Dress",
    DesignType.SUMMER: "Summer Dress",
    DesignType.FORMAL: "Formal Dress",
}


class Difficulty(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class SubmitStatus(str, Enum):
    IDLE = "idle"
    SUCCESS = "success"
    ERROR = "error"


class RenderStatus(str, Enum):
    EMPTY = "empty"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class DesignTypeOption(BaseModel):
    """드레스 종류 옵션"""
    id: DesignType
    label: str


class DesignRequest(BaseModel):
    """디자인 요청 (외부 서비스로 전송되는 본문)"""
    design_type: DesignType = Field(..., alias="designType")
    color: str = Field(..., pattern=r"^#[0-9a-fA-F]{6}$")
    style: str = Field(..., min_length=1)
    weight: float = Field(..., ge=30, le=200, description="kg")
    height: float = Field(..., ge=100, le=250, description="cm")

    model_config = ConfigDict(populate_by_name=True)


class DesignFormState(BaseModel):
    """폼 입력값. 기본값은 빈 폼"""
    design_type: Union[DesignType, str] = Field("", alias="designType")
    color: str = ""
    style: str = ""
    weight: float = 0
    height: float = 0

    model_config = ConfigDict(populate_by_name=True)


class FabricSuggestion(BaseModel):
    """원단 추천"""
    type: str
    description: str
    characteristics: List[str]
    estimated_cost: float = Field(..., alias="estimatedCost")

    model_config = ConfigDict(populate_by_name=True)


class Measurements(BaseModel):
    """키 기반 패턴 치수 (cm)"""
    bust: int
    waist: int
    hips: int
    length: int


class MakingPlan(BaseModel):
    """제작 가이드"""
    difficulty: Difficulty
    estimated_time: str = Field(..., alias="estimatedTime")
    required_tools: List[str] = Field(..., alias="requiredTools")
    measurements: Measurements
    instructions: List[str]

    model_config = ConfigDict(populate_by_name=True)


class DesignResult(BaseModel):
    """생성된 디자인 (렌더러 상태에만 존재)"""
    id: str
    design_type: str = Field(..., alias="designType")
    color: str
    style: str
    weight: float
    height: float
    design_photo: str = Field(..., alias="designPhoto")
    fabric_suggestion: FabricSuggestion = Field(..., alias="fabricSuggestion")
    making_details: MakingPlan = Field(..., alias="makingDetails")
    created_at: datetime = Field(..., alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)


class RendererState(BaseModel):
    """렌더러 상태 응답"""
    status: RenderStatus
    error: Optional[str] = None
    result: Optional[DesignResult] = None
