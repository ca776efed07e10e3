import flet as ft

from models import Task


def _text_style(completed: bool) -> ft.TextStyle:
    return ft.TextStyle(
        decoration=ft.TextDecoration.LINE_THROUGH if completed else None,
        color=ft.Colors.GREY if completed else None,
        weight=ft.FontWeight.W_400
    )


class TaskItem(ft.Column):
    """
    单个任务的显示控件。只负责把用户操作（切换、删除）连同任务 id 转发给回调，
    不直接修改任何数据，刷新由 TodoApp 统一完成。
    """

    def __init__(self, task: Task, on_toggle, on_delete):
        super().__init__()
        self.task = task
        self.on_toggle = on_toggle
        self.on_delete = on_delete

        self.checkbox = ft.Checkbox(
            value=task.completed,
            on_change=self.status_changed,
        )
        self.task_text = ft.Text(
            value=task.text,
            text_align=ft.TextAlign.LEFT,
            style=_text_style(task.completed),
        )

        # 文本可点击，点击等同于勾选
        self.text_container = ft.Container(
            content=self.task_text,
            expand=True,
            padding=ft.padding.only(left=8),
            on_click=self.text_clicked
        )

        self.display_view = ft.Container(
            content=ft.Row(
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                vertical_alignment=ft.CrossAxisAlignment.CENTER,
                controls=[
                    ft.Row(
                        controls=[self.checkbox, self.text_container],
                        alignment=ft.MainAxisAlignment.START,
                        vertical_alignment=ft.CrossAxisAlignment.CENTER,
                        spacing=0,
                        expand=True,
                    ),
                    ft.IconButton(
                        ft.Icons.DELETE_OUTLINE,
                        tooltip="删除任务",
                        on_click=self.delete_clicked,
                        icon_size=22,
                    ),
                ],
            ),
            padding=14,
            bgcolor=ft.Colors.WHITE,
            border_radius=12,
            shadow=ft.BoxShadow(
                blur_radius=4,
                color=ft.Colors.BLACK12,
                offset=ft.Offset(0, 2)
            ),
        )
        self.controls = [self.display_view]

    @property
    def completed(self) -> bool:
        return self.task.completed

    def status_changed(self, e):
        self.on_toggle(self.task.id)

    def text_clicked(self, e):
        self.on_toggle(self.task.id)

    def delete_clicked(self, e):
        self.on_delete(self.task.id)
