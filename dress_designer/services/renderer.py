import asyncio
from typing import Any, Callable, Dict, Optional

from ..models.schemas import DesignResult, RenderStatus, RendererState
from ..exceptions import DesignGenerationError, RendererStateError
from .channel import DesignChannel
from .generator import DesignGenerator, MockDesignGenerator
from ..config import settings
from ..utils.logger import logger

DIFFICULTY_BADGE_CLASSES = {
    "beginner": "bg-green-100 text-green-800",
    "intermediate": "bg-yellow-100 text-yellow-800",
    "advanced": "bg-red-100 text-red-800",
}
DEFAULT_BADGE_CLASS = "bg-gray-100 text-gray-800"


def difficulty_badge_class(difficulty: str) -> str:
    """난이도 배지 색상 (3단계 고정)"""
    return DIFFICULTY_BADGE_CLASSES.get(str(difficulty).lower(), DEFAULT_BADGE_CLASS)


class DesignRenderer:
    """designSubmitted 브로드캐스트를 받아 디자인 결과를 만드는 렌더러

    상태: empty -> loading -> (ready | error)
    새 브로드캐스트마다 loading부터 다시 시작하며, 마지막 payload의 결과만 반영된다.
    """

    def __init__(self, generator: DesignGenerator):
        self.generator = generator

        self.status = RenderStatus.EMPTY
        self.result: Optional[DesignResult] = None
        self.error: Optional[str] = None

        self._last_payload: Optional[Dict[str, Any]] = None
        self._task: Optional[asyncio.Task] = None
        self._generation = 0
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def is_mounted(self) -> bool:
        return self._unsubscribe is not None

    def mount(self, channel: DesignChannel) -> None:
        if self.is_mounted:
            raise RendererStateError("Renderer is already mounted")
        self._unsubscribe = channel.subscribe(self.handle_payload)
        logger.info(f"Renderer mounted on '{channel.name}'")

    def unmount(self) -> None:
        """구독 해제 및 진행 중인 생성 취소. 이후 상태 변경 없음"""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._cancel_pending()
        # 늦게 끝난 생성 결과도 버려지도록 세대 번호 증가
        self._generation += 1
        logger.info("Renderer unmounted")

    def handle_payload(self, payload: Dict[str, Any]) -> None:
        """브로드캐스트 수신"""
        if not self.is_mounted:
            return
        self._last_payload = payload
        self._start_generation(payload)

    def retry(self) -> None:
        """에러 해제 후 마지막 payload로 다시 생성"""
        self.error = None
        if self._last_payload is not None and self.is_mounted:
            self._start_generation(self._last_payload)
        else:
            self.status = RenderStatus.READY if self.result is not None else RenderStatus.EMPTY

    def _cancel_pending(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def _start_generation(self, payload: Dict[str, Any]) -> None:
        self._cancel_pending()
        self._generation += 1
        self.status = RenderStatus.LOADING
        self.error = None

        logger.info(f"Design generation #{self._generation} started")
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._generate(payload, self._generation))

    async def _generate(self, payload: Dict[str, Any], generation: int) -> None:
        try:
            result = await self.generator.generate(payload)
        except DesignGenerationError as e:
            if generation == self._generation:
                logger.error(f"Design generation #{generation} failed: {str(e)}")
                self.error = str(e)
                self.status = RenderStatus.ERROR
            return
        except Exception as e:
            # 예상하지 못한 생성기 오류도 loading에 머물지 않도록 error로 전환
            logger.error(f"Design generation #{generation} crashed: {str(e)}", exc_info=True)
            if generation == self._generation:
                self.error = f"Design generation failed: {str(e)}"
                self.status = RenderStatus.ERROR
            return

        if generation != self._generation:
            logger.info(f"Discarding stale design generation #{generation}")
            return

        self.result = result
        self.status = RenderStatus.READY
        logger.info(f"Design generation #{generation} ready: {result.id}")

    def state(self) -> RendererState:
        return RendererState(status=self.status, error=self.error, result=self.result)

    def view(self) -> Dict[str, Any]:
        """템플릿용 표시 데이터"""
        view = {
            "status": self.status.value,
            "error": self.error,
            "design": self.result,
        }
        if self.result is not None:
            design_type = self.result.design_type
            view["design_type_title"] = design_type[:1].upper() + design_type[1:]
            view["difficulty_class"] = difficulty_badge_class(self.result.making_details.difficulty.value)
        return view


# 싱글톤 인스턴스
_design_renderer = None

def get_design_renderer() -> DesignRenderer:
    """DesignRenderer 인스턴스 가져오기"""
    global _design_renderer
    if _design_renderer is None:
        _design_renderer = DesignRenderer(
            MockDesignGenerator(
                delay_seconds=settings.generation_delay_seconds,
                placeholder_image_url=settings.placeholder_image_url
            )
        )
    return _design_renderer
