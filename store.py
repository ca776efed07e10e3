import logging
import time
from dataclasses import replace
from enum import Enum
from typing import Callable

from models import STORAGE_KEY, MalformedTasksError, Task, deserialize_tasks, serialize_tasks

logger = logging.getLogger(__name__)


class FilterMode(Enum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    def matches(self, task: Task) -> bool:
        if self is FilterMode.ACTIVE:
            return not task.completed
        if self is FilterMode.COMPLETED:
            return task.completed
        return True


class IdGenerator:
    """以毫秒时间戳作为 id；同一毫秒内创建多个任务时在上一个 id 基础上加一，保证唯一且递增"""

    def __init__(self, last: int = 0, clock: Callable[[], float] = time.time):
        self.last = last
        self.clock = clock

    def seed(self, value: int) -> None:
        self.last = max(self.last, value)

    def __call__(self) -> int:
        candidate = int(self.clock() * 1000)
        if candidate <= self.last:
            candidate = self.last + 1
        self.last = candidate
        return candidate


class TodoStore:
    """
    待办事项的视图模型。

    tasks 是唯一的数据源，filtered_tasks() 和 active_count() 都是按需计算的投影。
    每次修改任务列表后都会把完整列表写回键值存储，并通知订阅者。
    """

    def __init__(self, blob_store, key: str = STORAGE_KEY, id_generator: IdGenerator | None = None):
        self.blob_store = blob_store
        self.key = key
        self.next_id = id_generator or IdGenerator()
        self.draft_text = ""
        self.filter_mode = FilterMode.ALL
        self._subscribers: list[Callable[["TodoStore"], None]] = []
        self._tasks = self._load()
        if self._tasks:
            self.next_id.seed(max(task.id for task in self._tasks))

    def _load(self) -> list[Task]:
        try:
            blob = self.blob_store.get(self.key)
            if blob is None:
                logger.info(f"没有已保存的任务 (key={self.key})，从空列表开始")
                return []
            tasks = deserialize_tasks(blob)
        except MalformedTasksError as e:
            logger.warning(f"已保存的任务数据损坏，使用空列表: {e}")
            return []

        seen = set()
        unique = []
        for task in tasks:
            if task.id in seen:
                logger.warning(f"丢弃重复 id 的任务: {task.id}")
                continue
            seen.add(task.id)
            unique.append(task)
        logger.info(f"已加载 {len(unique)} 项任务")
        return unique

    def _save(self) -> None:
        # 写入失败不在这里处理，交给调用方
        self.blob_store.set(self.key, serialize_tasks(self._tasks))
        logger.debug(f"已保存 {len(self._tasks)} 项任务")

    def _changed(self, persist: bool = True) -> None:
        if persist:
            self._save()
        for callback in list(self._subscribers):
            callback(self)

    def _index(self, task_id: int) -> int | None:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return None

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def subscribe(self, callback: Callable[["TodoStore"], None]) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def set_draft(self, text: str) -> None:
        self.draft_text = text or ""

    def add_task(self, raw_text: str | None) -> Task | None:
        text = (raw_text or "").strip()
        if not text:
            return None
        task = Task(self.next_id(), text)
        self._tasks.append(task)
        self.draft_text = ""
        logger.info(f"添加任务 {task.id}: {text}")
        self._changed()
        return task

    def remove_task(self, task_id: int) -> bool:
        i = self._index(task_id)
        if i is None:
            return False
        del self._tasks[i]
        logger.info(f"删除任务 {task_id}")
        self._changed()
        return True

    def toggle_task(self, task_id: int) -> Task | None:
        i = self._index(task_id)
        if i is None:
            return None
        # Task 不可变，替换原位置上的记录以保持顺序
        task = replace(self._tasks[i], completed=not self._tasks[i].completed)
        self._tasks[i] = task
        self._changed()
        return task

    def clear_completed(self) -> int:
        before = len(self._tasks)
        self._tasks = [task for task in self._tasks if not task.completed]
        removed = before - len(self._tasks)
        if removed:
            logger.info(f"清除了 {removed} 项已完成任务")
            self._changed()
        return removed

    def set_filter(self, mode: FilterMode | str) -> None:
        self.filter_mode = FilterMode(mode)
        self._changed(persist=False)

    def filtered_tasks(self) -> list[Task]:
        return [task for task in self._tasks if self.filter_mode.matches(task)]

    def active_count(self) -> int:
        return sum(1 for task in self._tasks if not task.completed)

    def completed_count(self) -> int:
        return len(self._tasks) - self.active_count()
