import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

# ------------------------------------------------------------------
# 数据持久化：存储路径设置
# ------------------------------------------------------------------
SAVE_DIR = Path(os.environ.get("TODO_SAVE_DIR") or os.environ.get("HOME", "."))
STORAGE_KEY = os.environ.get("TODO_STORAGE_KEY", "todos")


@dataclass(frozen=True)
class Task:
    id: int
    text: str
    completed: bool = False

    def to_dict(self) -> dict:
        return {"id": self.id, "text": self.text, "completed": self.completed}


class MalformedTasksError(ValueError):
    """持久化数据无法解析为任务列表"""


def serialize_tasks(tasks) -> str:
    return json.dumps([task.to_dict() for task in tasks], ensure_ascii=False)


def deserialize_tasks(blob: str) -> list[Task]:
    try:
        data = json.loads(blob)
    except (TypeError, RecursionError, json.JSONDecodeError) as e:
        # 嵌套过深的数组会触发 RecursionError
        raise MalformedTasksError(f"无法解析任务数据: {e}") from e
    if not isinstance(data, list):
        raise MalformedTasksError("任务数据必须是数组")

    tasks = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise MalformedTasksError(f"第 {i} 条记录不是对象")
        task_id = item.get("id")
        text = item.get("text")
        completed = item.get("completed", False)
        # bool 是 int 的子类，这里要排除
        if not isinstance(task_id, int) or isinstance(task_id, bool):
            raise MalformedTasksError(f"第 {i} 条记录的 id 无效: {task_id!r}")
        if not isinstance(text, str) or not text.strip():
            raise MalformedTasksError(f"第 {i} 条记录的 text 无效: {text!r}")
        if not isinstance(completed, bool):
            raise MalformedTasksError(f"第 {i} 条记录的 completed 无效: {completed!r}")
        tasks.append(Task(task_id, text, completed))
    return tasks


# ------------------------------------------------------------------
# 键值存储：get(key) -> str | None, set(key, str)
# ------------------------------------------------------------------
class MemoryBlobStore:
    def __init__(self, initial: dict | None = None):
        self.data = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class FileBlobStore:
    """每个键对应目录下的一个 JSON 文件"""

    def __init__(self, directory: Path = SAVE_DIR):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise MalformedTasksError(f"{path} 不是有效的 UTF-8 文本: {e}") from e

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self.path_for(key).write_text(value, encoding="utf-8")


class ClientStorageBlobStore:
    """flet 的 page.client_storage，Web 模式下即浏览器 localStorage"""

    def __init__(self, page, prefix: str = "todo_app."):
        self.page = page
        self.prefix = prefix

    def get(self, key: str) -> str | None:
        value = self.page.client_storage.get(self.prefix + key)
        if value is None:
            return None
        return str(value)

    def set(self, key: str, value: str) -> None:
        self.page.client_storage.set(self.prefix + key, value)
