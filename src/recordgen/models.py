from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

BrowserName = Literal["chromium", "firefox", "webkit"]

OUTPUT_FORMATS: tuple[str, ...] = ("body", "script", "test")

# 主页面别名，固定绑定到生成代码中的 pg
PRIMARY_PAGE_ALIAS = "page"


class _RecordModel(BaseModel):
    # 录制工具字段名是兼容契约：按 JSONL 原名读入，未知字段原样保留
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class LaunchOptions(_RecordModel):
    # null 与缺省一样视为 headless
    headless: bool | None = True


class RecordingHeader(_RecordModel):
    """JSONL 第 0 行：浏览器/启动/上下文配置"""

    browser_name: BrowserName = Field(default="chromium", alias="browserName")
    launch_options: LaunchOptions = Field(default_factory=LaunchOptions, alias="launchOptions")
    context_options: dict[str, Any] = Field(
        default_factory=dict,
        alias="contextOptions",
        description="透传字段，codegen 只做展示，不解释",
    )


class Signal(_RecordModel):
    name: str = Field(description="dialog / popup / download")


class Position(_RecordModel):
    x: int | float
    y: int | float


class ActionEvent(_RecordModel):
    """JSONL 第 1..n 行：一次录制到的交互或断言"""

    name: str = Field(description="动作类型（openPage/navigate/click/fill/assertText/...）")
    selector: str | None = None
    locator: Any = Field(default=None, description="结构化定位描述（legacy / versioned 两代格式），由 codegen.locators 解析")
    url: str | None = None
    text: str | None = None
    checked: bool | None = None
    click_count: int | None = Field(default=None, alias="clickCount")
    substring: bool | None = None
    key: str | None = None
    modifiers: int | None = Field(default=None, description="按键修饰位：1=Alt 2=ControlOrMeta 4=Meta 8=Shift")
    button: str | None = None
    position: Position | None = None
    options: list[str] | str | None = Field(default=None, description="select 动作的选项值")
    files: list[str] | str | None = None
    value: str | None = None
    snapshot: str | None = None
    signals: list[Signal] = Field(default_factory=list)
    page_alias: str = Field(default=PRIMARY_PAGE_ALIAS, alias="pageAlias")
    frame_path: list[str] = Field(default_factory=list, alias="framePath")


# ========== 定位描述（两代 schema） ==========


class LegacyRoleLocator(BaseModel):
    """旧版：{role, name?, exact?}"""

    role: str
    name: str | None = None
    exact: bool | None = None


class LocatorAttr(BaseModel):
    name: str
    value: Any = None


class LocatorOptions(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str | None = None
    exact: bool | None = None
    attrs: list[LocatorAttr] = Field(default_factory=list)


class VersionedLocator(BaseModel):
    """新版：{kind, body, options, next?}"""

    model_config = ConfigDict(extra="allow")

    kind: str
    body: str
    options: LocatorOptions = Field(default_factory=LocatorOptions)
    next: VersionedLocator | None = None


class ParsedRecording(BaseModel):
    header: RecordingHeader
    actions: list[ActionEvent]
