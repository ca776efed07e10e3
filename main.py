# === 在文件最顶部添加以下修复代码 ===
import sys
import os
# 修复：防止 sys.stdout / sys.stderr 为 None（常见于 PyInstaller --noconsole）
if sys.stdout is None:
    sys.stdout = open(os.devnull, "w")
if sys.stderr is None:
    sys.stderr = open(os.devnull, "w")
# === 然后再导入其他模块 ===
import logging

import flet as ft

from models import SAVE_DIR, STORAGE_KEY, ClientStorageBlobStore, FileBlobStore
from store import TodoStore
from todo_app import TodoApp

logger = logging.getLogger(__name__)


def configure_logging(log_file: str = "todo_app.log"):
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler()
        ]
    )


def build_store(page: ft.Page) -> TodoStore:
    # Web 模式每个会话使用浏览器本地存储，桌面模式写入 SAVE_DIR 下的文件
    if page.web:
        blob_store = ClientStorageBlobStore(page)
        logger.info(f"会话 {page.session_id} 使用浏览器本地存储")
    else:
        blob_store = FileBlobStore(SAVE_DIR)
        logger.info(f"任务保存在 {blob_store.path_for(STORAGE_KEY)}")
    return TodoStore(blob_store, key=STORAGE_KEY)


def main(page: ft.Page):
    # 设置页面属性
    page.title = "待办清单"
    page.window_min_width = 320
    page.window_min_height = 600
    page.scroll = ft.ScrollMode.AUTO
    page.padding = 10
    page.horizontal_alignment = ft.CrossAxisAlignment.CENTER

    store = build_store(page)
    page.add(TodoApp(page, store))


if __name__ == "__main__":
    configure_logging()
    # 检查命令行参数
    if len(sys.argv) > 1 and sys.argv[1] == "web":
        # 启动为 Web 应用（可通过浏览器访问）
        try:
            ft.app(
                target=main,
                view=ft.AppView.WEB_BROWSER,
                host="0.0.0.0",
                port=8550,
            )
        except Exception as e:
            logger.error(f"启动 Web 应用失败: {e}")
            logger.info("尝试使用备用配置...")
            ft.app(
                target=main,
                view=ft.AppView.WEB_BROWSER,
                host="127.0.0.1",
                port=8550
            )
    else:
        # 默认启动为桌面应用
        ft.app(target=main)
