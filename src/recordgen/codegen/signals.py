"""
信号包装：动作翻译之后，按事件记录的 signals 对片段做纯函数式包装。

- dialog：在动作之前注册页面级的 dialog 处理器（对整个页面生效，不只这一个动作）
- popup / download：用 expect_popup / expect_download 上下文包住动作，并绑定结果变量

多个信号时按列表顺序依次包装。
"""
from __future__ import annotations

from typing import Callable

from recordgen.codegen.fragment import Fragment
from recordgen.errors import UnknownSignalError
from recordgen.models import ActionEvent, Signal


def _wrap_dialog(fragment: Fragment, page: str) -> Fragment:
    return Fragment(
        lines=(f'{page}.on("dialog", lambda dialog: dialog.dismiss())', *fragment.lines),
        imports=fragment.imports,
    )


def _wrap_popup(fragment: Fragment, page: str) -> Fragment:
    return Fragment(
        lines=(
            f"with {page}.expect_popup() as popup_info:",
            *fragment.indented(),
            "popup_pg = popup_info.value",
            "# popup_pg is now available for further actions",
        ),
        imports=fragment.imports,
    )


def _wrap_download(fragment: Fragment, page: str) -> Fragment:
    return Fragment(
        lines=(
            f"with {page}.expect_download() as download_info:",
            *fragment.indented(),
            "download = download_info.value",
            "# download is now available - download.path(), download.suggested_filename",
        ),
        imports=fragment.imports,
    )


SIGNAL_WRAPPERS: dict[str, Callable[[Fragment, str], Fragment]] = {
    "dialog": _wrap_dialog,
    "popup": _wrap_popup,
    "download": _wrap_download,
}


def wrap(fragment: Fragment, signal: Signal, page: str, event: ActionEvent | None = None) -> Fragment:
    wrapper = SIGNAL_WRAPPERS.get(signal.name)
    if wrapper is None:
        record = event.model_dump(by_alias=True, exclude_none=True) if event is not None else None
        raise UnknownSignalError(signal.name, record)
    return wrapper(fragment, page)


def wrap_signals(fragment: Fragment, event: ActionEvent, page: str) -> Fragment:
    for signal in event.signals:
        fragment = wrap(fragment, signal, page, event)
    return fragment
