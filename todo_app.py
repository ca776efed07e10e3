import logging

import flet as ft

from store import FilterMode, TodoStore
from task import TaskItem

logger = logging.getLogger(__name__)

# 标签页顺序与筛选模式一一对应
FILTER_TABS = [
    (FilterMode.ALL, "全部"),
    (FilterMode.ACTIVE, "进行中"),
    (FilterMode.COMPLETED, "已完成"),
]


class TodoApp(ft.Column):
    def __init__(self, page: ft.Page, store: TodoStore):
        super().__init__()
        self.page = page  # 保存page引用
        self.store = store
        self.new_task = ft.TextField(
            hint_text="输入新任务…",
            value=store.draft_text,
            on_change=self.draft_changed,
            on_submit=self.add_clicked,
            expand=True,
            border_radius=24,
            filled=True,
            bgcolor=ft.Colors.WHITE,
            content_padding=ft.padding.symmetric(horizontal=18, vertical=14),
            multiline=False,  # 禁用多行输入，确保Enter键添加任务
            shift_enter=False
        )
        self.tasks = ft.Column(spacing=6)

        self.filter = ft.Tabs(
            scrollable=False,
            selected_index=self._tab_index(store.filter_mode),
            on_change=self.tabs_changed,
            tabs=[ft.Tab(text=label) for _, label in FILTER_TABS],
        )

        self.items_left = ft.Text("0 项任务剩余")

        self.width = 600
        self.controls = [
            # 标题
            ft.Container(
                content=ft.Text("待办清单", size=24, weight=ft.FontWeight.W_600),
                padding=ft.padding.only(left=16, top=8, bottom=8)
            ),
            # 输入栏
            ft.Container(
                content=ft.Row(
                    controls=[
                        self.new_task,
                        ft.FloatingActionButton(
                            icon=ft.Icons.ADD,
                            on_click=self.add_clicked,
                            mini=True,
                            bgcolor=ft.Colors.BLUE
                        ),
                    ],
                    spacing=8
                ),
                padding=ft.padding.symmetric(horizontal=16, vertical=6)
            ),
            ft.Divider(height=1, thickness=1, color=ft.Colors.BLUE_GREY_200),
            # 任务区域
            ft.Column(
                spacing=25,
                controls=[
                    self.filter,
                    self.tasks,
                    ft.Row(
                        alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                        vertical_alignment=ft.CrossAxisAlignment.CENTER,
                        controls=[
                            self.items_left,
                            ft.OutlinedButton(
                                text="清除已完成", on_click=self.clear_clicked
                            ),
                        ],
                    ),
                ],
            ),
        ]
        self.unsubscribe = store.subscribe(self.store_changed)
        self.build_list(initial=True)  # 初始构建，不调用update

    @staticmethod
    def _tab_index(mode: FilterMode) -> int:
        return [m for m, _ in FILTER_TABS].index(mode)

    def build_list(self, initial=False):
        self.tasks.controls.clear()
        visible = self.store.filtered_tasks()
        if not visible:
            self.tasks.controls.append(
                ft.Container(
                    content=ft.Text("暂无任务，快来添加吧！", size=16, color=ft.Colors.GREY),
                    alignment=ft.alignment.center,
                    padding=ft.padding.only(top=40)
                )
            )
        else:
            for task in visible:
                self.tasks.controls.append(
                    TaskItem(task, self.store.toggle_task, self.store.remove_task)
                )
        self.items_left.value = f"{self.store.active_count()} 项任务剩余"
        self.new_task.value = self.store.draft_text
        self.filter.selected_index = self._tab_index(self.store.filter_mode)

        # 初始构建时不调用update，因为控件还未添加到页面
        if not initial:
            self.page.update()

    def store_changed(self, store):
        self.build_list()

    def draft_changed(self, e):
        self.store.set_draft(self.new_task.value)

    def add_clicked(self, e):
        self.store.set_draft(self.new_task.value)
        if self.store.add_task(self.store.draft_text) and self.new_task.page:
            self.new_task.focus()

    def tabs_changed(self, e):
        mode, _ = FILTER_TABS[self.filter.selected_index]
        self.store.set_filter(mode)

    def clear_clicked(self, e):
        self.store.clear_completed()
