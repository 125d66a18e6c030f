"""並列呼び出しの全件待ち合わせ（join-all-settle）"""

from collections.abc import Callable, Hashable
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from src.domain.exceptions import UpstreamTransportError
from src.infrastructure.logging_config import get_logger

logger = get_logger(__name__)

K = TypeVar("K", bound=Hashable)


@dataclass
class Outcome(Generic[K]):
    """1タスク分の結果（成功値か失敗理由のどちらか）"""

    key: K
    value: Any = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def settle_all(
    tasks: list[tuple[K, Callable[[], Any]]],
    timeout: float | None = None,
    max_workers: int | None = None,
) -> list[Outcome[K]]:
    """
    全タスクを並列実行し、成功・失敗にかかわらず全件の結果を返す

    1件の失敗で他のタスクを中断しない。結果は完了順ではなく投入順に並ぶ。
    timeout 経過時点で終わっていないタスクはタイムアウト扱いとし、
    その結果は待たずに破棄する。

    Args:
        tasks: [(キー, 引数なしの呼び出し), ...]
        timeout: 全体の待ち時間上限（秒）
        max_workers: スレッド数（デフォルトはタスク数）

    Returns:
        投入順の Outcome リスト
    """
    if not tasks:
        return []

    executor = ThreadPoolExecutor(max_workers=max_workers or len(tasks))
    try:
        futures: list[tuple[K, Future]] = [
            (key, executor.submit(call)) for key, call in tasks
        ]
        wait([f for _, f in futures], timeout=timeout)

        outcomes: list[Outcome[K]] = []
        for key, future in futures:
            if not future.done():
                future.cancel()
                logger.warning(f"[FanOut] タイムアウト: {key}")
                outcomes.append(
                    Outcome(key=key, error=UpstreamTransportError(f"{key} timed out"))
                )
                continue
            error = future.exception()
            if error is not None:
                outcomes.append(Outcome(key=key, error=error))
            else:
                outcomes.append(Outcome(key=key, value=future.result()))
        return outcomes
    finally:
        # 未完了のスレッドは待たずに切り離す
        executor.shutdown(wait=False, cancel_futures=True)
