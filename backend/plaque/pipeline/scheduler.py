"""
防抖调度器 - 可取消的延迟再生成任务

职责：
1. 每次变更取消待触发的定时任务并重新计时（后写者胜）
2. 代次计数器：只有最新代次的结果会被发布
3. 被新变更取代的执行任务立即取消，同一时刻至多一个再生成在执行

说明：
- 定时任务与执行任务分开持有，schedule/close 对两者都会取消
- 工作函数在线程中执行时，取消只作用于等待方；线程跑完后结果随任务一起丢弃

测试要点：
- test_debounce_last_write_wins: 窗口内三次变更只触发一次，使用最后的值
- test_superseded_run_cancelled: 执行中被取代的任务被取消，新代次不等待旧任务
- test_close_cancels_pending: 关闭后不再触发回调
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class DebouncedScheduler(Generic[T, R]):
    """基于 asyncio 的防抖调度器"""

    def __init__(
        self,
        worker: Callable[[T, int], Awaitable[R]],
        on_result: Callable[[R], None],
        delay_ms: int = 300,
        on_error: Callable[[Exception, int], None] | None = None,
    ):
        self._worker = worker
        self._on_result = on_result
        self._on_error = on_error
        self.delay = delay_ms / 1000
        self._generation = 0
        self._timer: asyncio.Task | None = None
        self._inflight: asyncio.Task | None = None
        self.runs = 0
        self.cancelled = 0
        self.published = 0

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending(self) -> bool:
        return any(t is not None and not t.done() for t in (self._timer, self._inflight))

    def schedule(self, value: T) -> int:
        """登记一次变更，返回其代次；需在运行中的事件循环内调用"""
        loop = asyncio.get_running_loop()
        self._generation += 1
        generation = self._generation
        self._cancel_tasks()
        self._timer = loop.create_task(self._wait_then_run(value, generation))
        return generation

    async def flush(self) -> None:
        """等待所有待触发/执行中的任务结束"""
        while True:
            tasks = self._live_tasks()
            if not tasks:
                return
            await asyncio.gather(*tasks, return_exceptions=True)

    async def close(self) -> None:
        """取消所有任务，之后不会再发布任何结果"""
        self._generation += 1
        tasks = self._cancel_tasks()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    def _live_tasks(self) -> list[asyncio.Task]:
        return [t for t in (self._timer, self._inflight) if t is not None and not t.done()]

    def _cancel_tasks(self) -> list[asyncio.Task]:
        tasks = self._live_tasks()
        for task in tasks:
            task.cancel()
        return tasks

    async def _wait_then_run(self, value: T, generation: int) -> None:
        await asyncio.sleep(self.delay)
        if generation != self._generation:
            return
        self._inflight = asyncio.get_running_loop().create_task(self._run(value, generation))

    async def _run(self, value: T, generation: int) -> None:
        self.runs += 1
        try:
            result = await self._worker(value, generation)
        except asyncio.CancelledError:
            self.cancelled += 1
            logger.debug(f"执行中的代次 {generation} 已被取代，取消")
            raise
        except Exception as e:
            if generation != self._generation:
                logger.debug(f"过期代次 {generation} 执行失败，忽略: {e}")
                return
            if self._on_error is None:
                logger.error(f"再生成失败(代次 {generation}): {e}")
                return
            self._on_error(e, generation)
            return

        if generation != self._generation:
            logger.debug(f"丢弃过期结果: 代次 {generation}, 最新 {self._generation}")
            return
        self.published += 1
        self._on_result(result)
