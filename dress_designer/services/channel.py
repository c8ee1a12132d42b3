from typing import Any, Callable, Dict, List

from ..utils.logger import logger

DESIGN_SUBMITTED = "designSubmitted"

Handler = Callable[[Dict[str, Any]], None]


class DesignChannel:
    """프로세스 전역 브로드캐스트 채널 (fire-and-forget)

    발행자는 구독자를 알지 못하고, 구독자의 반환값도 받지 않는다.
    """

    def __init__(self, name: str = DESIGN_SUBMITTED):
        self.name = name
        self._handlers: List[Handler] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)

    def subscribe(self, handler: Handler) -> Callable[[], None]:
        """구독 등록. 구독 해제 함수를 반환"""
        self._handlers.append(handler)
        logger.info(f"[{self.name}] subscriber added ({self.subscriber_count} total)")

        def unsubscribe() -> None:
            # 두 번 호출해도 무시
            if handler in self._handlers:
                self._handlers.remove(handler)
                logger.info(f"[{self.name}] subscriber removed ({self.subscriber_count} total)")

        return unsubscribe

    def publish(self, payload: Dict[str, Any]) -> None:
        """모든 구독자에게 payload 전달"""
        handlers = list(self._handlers)
        logger.info(f"[{self.name}] publishing to {len(handlers)} subscriber(s)")

        for handler in handlers:
            try:
                handler(payload)
            except Exception as e:
                # 한 구독자의 실패가 다른 구독자 전달을 막지 않음
                logger.error(f"[{self.name}] subscriber failed: {str(e)}", exc_info=True)


# 싱글톤 인스턴스
_design_channel = None

def get_design_channel() -> DesignChannel:
    """DesignChannel 인스턴스 가져오기"""
    global _design_channel
    if _design_channel is None:
        _design_channel = DesignChannel()
    return _design_channel
