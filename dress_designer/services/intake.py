import asyncio
from typing import Any, Dict, Optional

import requests

from ..models.schemas import DesignFormState, DesignRequest, SubmitStatus
from ..exceptions import SubmissionFailure, SubmissionInProgressError
from .channel import DesignChannel, get_design_channel
from ..config import settings
from ..utils.logger import logger

DESIGNS_PATH = "/api/designs"


class DesignIntake:
    """디자인 요청 폼 상태 관리 및 외부 서비스 전송"""

    def __init__(self, channel: DesignChannel, base_url: str, timeout_seconds: int = 30):
        self.channel = channel
        self.base_url = base_url.rstrip('/')
        self.timeout_seconds = timeout_seconds

        self.form = DesignFormState()
        self.status = SubmitStatus.IDLE
        self.is_submitting = False
        self.last_error: Optional[str] = None

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}{DESIGNS_PATH}"

    def update_form(self, **values: Any) -> None:
        """폼 필드 갱신 (snake_case 또는 camelCase)"""
        data = self.form.model_dump()
        for key, value in values.items():
            if key == "designType":
                key = "design_type"
            if key not in data:
                raise KeyError(f"Unknown form field: {key}")
            data[key] = value
        self.form = DesignFormState(**data)

    def reset_form(self) -> None:
        self.form = DesignFormState()

    def _post(self, body: Dict[str, Any]) -> requests.Response:
        return requests.post(
            self.endpoint,
            json=body,
            headers={"Content-Type": "application/json"},
            timeout=self.timeout_seconds,
        )

    async def submit(self, request: DesignRequest) -> Dict[str, Any]:
        """디자인 요청 전송

        성공 시 폼을 초기화하고 응답 본문을 채널에 그대로 브로드캐스트한다.
        실패 시 폼 값은 유지되고 SubmissionFailure가 발생한다 (자동 재시도 없음).
        """
        if self.is_submitting:
            raise SubmissionInProgressError("Design request already in flight")

        self.is_submitting = True
        self.status = SubmitStatus.IDLE
        self.last_error = None

        try:
            body = request.model_dump(mode="json", by_alias=True)
            logger.info(f"Submitting design request to {self.endpoint}: {body}")

            try:
                # 블로킹 HTTP 호출은 스레드에서 실행
                response = await asyncio.to_thread(self._post, body)
            except requests.RequestException as e:
                raise SubmissionFailure(f"Design service unreachable: {str(e)}")

            if not 200 <= response.status_code < 300:
                raise SubmissionFailure(
                    f"Design service returned HTTP {response.status_code}",
                    status_code=response.status_code
                )

            try:
                result = response.json()
            except ValueError as e:
                raise SubmissionFailure(f"Invalid JSON from design service: {str(e)}",
                                        status_code=response.status_code)

            if not isinstance(result, dict):
                raise SubmissionFailure("Design service response is not a JSON object",
                                        status_code=response.status_code)

        except SubmissionFailure as e:
            logger.error(f"Design submission failed: {str(e)}")
            self.status = SubmitStatus.ERROR
            self.last_error = str(e)
            raise
        finally:
            self.is_submitting = False

        self.reset_form()
        self.channel.publish(result)
        self.status = SubmitStatus.SUCCESS

        logger.info(f"Design request submitted successfully: {result.get('id', 'unknown')}")
        return result


# 싱글톤 인스턴스
_design_intake = None

def get_design_intake() -> DesignIntake:
    """DesignIntake 인스턴스 가져오기"""
    global _design_intake
    if _design_intake is None:
        _design_intake = DesignIntake(
            get_design_channel(),
            settings.base_url,
            settings.design_request_timeout_seconds
        )
    return _design_intake
