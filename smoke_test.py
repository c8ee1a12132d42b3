"""
실행 중인 서버 대상 스모크 테스트

사용법:
    python smoke_test.py --endpoint http://localhost:8000 --count 6

설명:
    - 드레스 종류별 샘플 폼을 /designer/submit 으로 전송
    - /api/designer/state 를 폴링하여 디자인이 ready 상태가 될 때까지 대기
    - 계산된 치수가 키 기반 공식과 일치하는지 확인
    - 결과를 smoke_report.md에 저장
"""

import argparse
import math
import statistics
import time
from typing import Any, Dict, List

import requests

DESIGN_TYPES = ["evening", "casual", "cocktail", "wedding", "summer", "formal"]
RATIOS = {"bust": 0.55, "waist": 0.45, "hips": 0.53, "length": 0.6}


def expected_measurements(height: float) -> Dict[str, int]:
    return {name: int(math.floor(height * ratio + 0.5)) for name, ratio in RATIOS.items()}


class SmokeTester:
    def __init__(self, endpoint: str, poll_timeout: float = 15.0):
        self.endpoint = endpoint.rstrip('/')
        self.poll_timeout = poll_timeout

    def sample_form(self, index: int) -> Dict[str, Any]:
        return {
            "designType": DESIGN_TYPES[index % len(DESIGN_TYPES)],
            "color": f"#{(index * 0x231f17) % 0xffffff:06x}",
            "style": "A-line",
            "weight": str(50 + index * 5),
            "height": str(150 + index * 5),
        }

    def wait_for_ready(self) -> Dict[str, Any]:
        deadline = time.time() + self.poll_timeout
        while time.time() < deadline:
            state = requests.get(f"{self.endpoint}/api/designer/state", timeout=10).json()
            if state["status"] in ("ready", "error"):
                return state
            time.sleep(0.2)
        raise TimeoutError(f"디자인 생성이 {self.poll_timeout}초 안에 끝나지 않았습니다.")

    def run_once(self, index: int) -> Dict[str, Any]:
        """폼 1건 전송 후 결과 확인"""
        form = self.sample_form(index)
        print(f"\nSubmitting: {form['designType']} / {form['height']}cm")

        start_time = time.time()
        try:
            response = requests.post(f"{self.endpoint}/designer/submit", data=form, timeout=30)
            if response.status_code != 200:
                return {
                    'form': form,
                    'success': False,
                    'elapsed': time.time() - start_time,
                    'error': f"HTTP {response.status_code}"
                }

            state = self.wait_for_ready()
            elapsed = time.time() - start_time

            if state["status"] != "ready":
                return {'form': form, 'success': False, 'elapsed': elapsed, 'error': state.get("error")}

            measurements = state["result"]["makingDetails"]["measurements"]
            expected = expected_measurements(float(form["height"]))
            return {
                'form': form,
                'success': measurements == expected,
                'elapsed': elapsed,
                'error': None if measurements == expected else f"measurements {measurements} != {expected}"
            }
        except Exception as e:
            return {'form': form, 'success': False, 'elapsed': time.time() - start_time, 'error': str(e)}

    def run(self, count: int) -> List[Dict[str, Any]]:
        results = []
        for index in range(count):
            result = self.run_once(index)
            status = "OK" if result['success'] else f"FAIL ({result['error']})"
            print(f"  -> {status} in {result['elapsed']:.2f}s")
            results.append(result)
        return results

    def generate_report(self, results: List[Dict[str, Any]], output_file: str = "smoke_report.md"):
        """스모크 테스트 보고서 생성"""
        total = len(results)
        successful = sum(1 for r in results if r['success'])
        times = [r['elapsed'] for r in results if r['success']]

        with open(output_file, 'w', encoding='utf-8') as f:
            f.write("# Dress Designer 스모크 테스트 보고서\n\n")

            f.write("## 1. 요약\n\n")
            f.write(f"- 테스트 날짜: {time.strftime('%Y-%m-%d %H:%M:%S')}\n")
            f.write(f"- 엔드포인트: {self.endpoint}\n")
            f.write(f"- 총 요청 수: {total}\n")
            if total:
                f.write(f"- 성공: {successful} ({successful/total*100:.1f}%)\n")
                f.write(f"- 실패: {total - successful}\n\n")

            if times:
                f.write("## 2. 전송부터 표시까지 걸린 시간\n\n")
                f.write(f"- 평균: {statistics.mean(times):.2f}초\n")
                f.write(f"- 최소: {min(times):.2f}초\n")
                f.write(f"- 최대: {max(times):.2f}초\n")
                f.write(f"- 중앙값: {statistics.median(times):.2f}초\n\n")

            f.write("## 3. 개별 결과\n\n")
            f.write("| 종류 | 키 | 결과 | 시간 | 오류 |\n")
            f.write("|------|----|------|------|------|\n")
            for r in results:
                form = r['form']
                f.write(
                    f"| {form['designType']} | {form['height']} | "
                    f"{'성공' if r['success'] else '실패'} | {r['elapsed']:.2f}s | {r['error'] or ''} |\n"
                )

        print(f"\n보고서가 {output_file}에 저장되었습니다.")


def main():
    parser = argparse.ArgumentParser(description='Dress Designer 스모크 테스트')
    parser.add_argument('--endpoint', default='http://localhost:8000', help='서버 URL')
    parser.add_argument('--count', type=int, default=len(DESIGN_TYPES), help='전송할 요청 수')
    parser.add_argument('--timeout', type=float, default=15.0, help='결과 대기 시간(초)')
    parser.add_argument('--output', default='smoke_report.md', help='보고서 출력 파일')

    args = parser.parse_args()

    tester = SmokeTester(args.endpoint, args.timeout)
    results = tester.run(args.count)
    tester.generate_report(results, args.output)

    successful = sum(1 for r in results if r['success'])
    print(f"\n총 {len(results)}건 완료 - 성공: {successful}, 실패: {len(results) - successful}")


if __name__ == "__main__":
    main()
