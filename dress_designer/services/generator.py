import asyncio
import math
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from urllib.parse import quote

from ..models.schemas import (
    DesignResult,
    Difficulty,
    FabricSuggestion,
    MakingPlan,
    Measurements,
)
from ..utils.logger import logger

# 페이로드 필드 누락 시 기본값
PAYLOAD_DEFAULTS = {
    "id": "mock-design-id",
    "designType": "evening",
    "color": "#000000",
    "style": "elegant",
    "weight": 65,
    "height": 170,
}

# 키 대비 치수 비율
MEASUREMENT_RATIOS = {
    "bust": 0.55,
    "waist": 0.45,
    "hips": 0.53,
    "length": 0.6,
}

MOCK_FABRIC = {
    "type": "Silk Chiffon",
    "description": "Lightweight, flowing fabric perfect for elegant evening wear",
    "characteristics": ["Breathable", "Drapes beautifully", "Soft texture", "Natural fiber"],
    "estimated_cost": 45,
}

MOCK_MAKING_PLAN = {
    "difficulty": Difficulty.INTERMEDIATE,
    "estimated_time": "8-12 hours",
    "required_tools": ["Sewing machine", "Fabric scissors", "Measuring tape", "Pins", "Needles"],
    "instructions": [
        "Take accurate body measurements",
        "Create a pattern based on measurements",
        "Cut fabric according to pattern",
        "Sew main seams together",
        "Add finishing touches and hem",
    ],
}


def _round_half_up(value: float) -> int:
    # round()는 banker's rounding (76.5 -> 76)
    return int(math.floor(value + 0.5))


def _as_number(value: Any) -> Optional[float]:
    """유한한 숫자로 변환. 변환 불가 또는 NaN/Infinity이면 None"""
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def derive_measurements(height: float) -> Measurements:
    """키(cm)로부터 패턴 치수 계산 (실측이 아닌 근사치)"""
    return Measurements(**{
        name: _round_half_up(height * ratio)
        for name, ratio in MEASUREMENT_RATIOS.items()
    })


def build_design_photo_url(base_url: str, payload: Dict[str, Any]) -> str:
    """색상/종류 기반 placeholder 이미지 URL"""
    color = str(payload.get("color") or "")[1:] or "000000"
    text = quote(str(payload.get("designType") or "Dress"), safe="!~*'()")
    return f"{base_url.rstrip('/')}/{color}/ffffff?text={text}"


class DesignGenerator(ABC):
    """디자인 생성기 인터페이스 (mock / 실제 서비스 교체 가능)"""

    @abstractmethod
    async def generate(self, payload: Dict[str, Any]) -> DesignResult:
        """payload로부터 DesignResult 생성. 실패 시 DesignGenerationError"""


class MockDesignGenerator(DesignGenerator):
    """고정 지연 후 템플릿 결과를 만드는 생성기 (실패하지 않음)"""

    def __init__(self, delay_seconds: float = 2.0,
                 placeholder_image_url: str = "https://via.placeholder.com/400x600"):
        self.delay_seconds = delay_seconds
        self.placeholder_image_url = placeholder_image_url

    async def generate(self, payload: Dict[str, Any]) -> DesignResult:
        await asyncio.sleep(self.delay_seconds)

        values = {key: payload.get(key) or default for key, default in PAYLOAD_DEFAULTS.items()}
        missing = [key for key in PAYLOAD_DEFAULTS if not payload.get(key)]

        # 숫자가 아니거나 NaN/Infinity인 값도 누락으로 취급
        for key in ("weight", "height"):
            number = _as_number(values[key])
            if number is None:
                missing.append(key)
                number = float(PAYLOAD_DEFAULTS[key])
            values[key] = number

        if missing:
            logger.warning(f"Payload missing fields, using defaults: {', '.join(missing)}")

        height = values["height"]
        result = DesignResult(
            id=str(values["id"]),
            design_type=str(values["designType"]),
            color=str(values["color"]),
            style=str(values["style"]),
            weight=values["weight"],
            height=height,
            design_photo=build_design_photo_url(self.placeholder_image_url, payload),
            fabric_suggestion=FabricSuggestion(**MOCK_FABRIC),
            making_details=MakingPlan(
                measurements=derive_measurements(height),
                **MOCK_MAKING_PLAN
            ),
            created_at=datetime.now(timezone.utc),
        )

        logger.info(f"Mock design generated: {result.id} ({result.design_type}, {height:g}cm)")
        return result
