"""애플리케이션 예외"""
from typing import Optional


class DressDesignerError(Exception):
    """모든 애플리케이션 예외의 기본 클래스"""


class SubmissionFailure(DressDesignerError):
    """디자인 요청 전송 실패 (네트워크 오류 또는 2xx 이외의 응답)"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SubmissionInProgressError(DressDesignerError):
    """이미 전송 중인 요청이 있음"""


class DesignGenerationError(DressDesignerError):
    """디자인 생성 실패"""


class RendererStateError(DressDesignerError):
    """렌더러 mount/unmount 순서 오류"""
