"""Construction-time configuration for a pagination widget.

All behavior-affecting options live in ``LoadMoreConfig``. Validation runs
in ``__post_init__`` so an invalid configuration fails before a controller
exists, never at navigation time.

Example:
    config = LoadMoreConfig(
        mode=SourceMode.REMOTE,
        items_per_page=10,
        presentation_type=PresentationType.NUMBERED,
        visible_pages=5,
    )

    # Or from plain host options
    config = LoadMoreConfig.from_mapping({"type": "pagination", "itemsPerPage": 5})
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any

from loadmore.core.errors import ConfigurationError
from loadmore.core.responsive import DEFAULT_BREAKPOINTS


class SourceMode(Enum):
    """Where items come from. Fixed for the lifetime of a controller."""

    LOCAL = "local"
    REMOTE = "remote"


class RetentionMode(Enum):
    """What happens to evicted items."""

    REMOVE = "remove"
    HIDE = "hide"


class PresentationType(Enum):
    """Which presentation adapter consumes the controller."""

    INCREMENTAL = "loadmore"
    NUMBERED = "pagination"
    PREV_NEXT = "prevnext"


# camelCase host option names accepted by from_mapping
_OPTION_ALIASES = {
    "type": "presentation_type",
    "itemsPerPage": "items_per_page",
    "responsiveItemsPerPage": "responsive_items_per_page",
    "maxDOMItems": "max_retained",
    "maxRetained": "max_retained",
    "seoMode": "retention_mode",
    "retentionMode": "retention_mode",
    "presentationType": "presentation_type",
    "visiblePages": "visible_pages",
    "updateHistory": "update_history",
    "historyStateKey": "history_key",
    "historyKey": "history_key",
    "initialPage": "initial_page",
    "initialLoad": "initial_load",
    "optimizeDOM": "optimize",
    "ajaxDataKey": "data_key",
    "ajaxTotalKey": "total_key",
    "ajaxParams": "static_params",
    "useLocalData": "mode",
}


@dataclass
class LoadMoreConfig:
    """Behavior-affecting options of a pagination widget.

    Attributes:
        mode: Local in-memory data or a remote paged endpoint.
        items_per_page: Static page size, also the fallback for missing
            responsive entries.
        responsive_items_per_page: Optional breakpoint name to page size map
            (``xs``, ``sm``, ``md``, ``lg``, ``xl``).
        max_retained: Upper bound on materialized items.
        retention_mode: Remove evicted items or keep them hidden.
        presentation_type: Which presentation adapter drives navigation.
        visible_pages: Number of page links shown by the numbered adapter.
        update_history: Notify the history sink after each navigation.
        history_key: Query parameter name used by history helpers.
        initial_page: Page loaded first by paged presentations.
        initial_load: Load the first window when the controller starts.
        optimize: Run the eviction policy after each load.
        local_delay: Scheduling delay, in seconds, for local loads.
        click_interval: Minimum seconds between accepted page-link clicks.
        data_key: Response key holding the items array.
        total_key: Response key holding the total item count.
        static_params: Extra parameters passed to every remote fetch.
    """

    mode: SourceMode = SourceMode.LOCAL
    items_per_page: int = 10
    responsive_items_per_page: dict[str, int] | None = None
    max_retained: int = 50
    retention_mode: RetentionMode = RetentionMode.REMOVE
    presentation_type: PresentationType = PresentationType.INCREMENTAL
    visible_pages: int = 5
    update_history: bool = False
    history_key: str = "page"
    initial_page: int = 1
    initial_load: bool = True
    optimize: bool = True
    local_delay: float = 0.0
    click_interval: float = 0.2
    data_key: str = "data"
    total_key: str = "total"
    static_params: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.mode = _coerce_enum(SourceMode, self.mode, "mode")
        self.retention_mode = _coerce_enum(
            RetentionMode, self.retention_mode, "retention_mode"
        )
        self.presentation_type = _coerce_enum(
            PresentationType, self.presentation_type, "presentation_type"
        )
        _require_positive_int(self.items_per_page, "items_per_page")
        _require_positive_int(self.max_retained, "max_retained")
        _require_positive_int(self.visible_pages, "visible_pages")
        _require_positive_int(self.initial_page, "initial_page")

        if self.responsive_items_per_page:
            known = {bp.name for bp in DEFAULT_BREAKPOINTS}
            for name, size in self.responsive_items_per_page.items():
                if name not in known:
                    raise ConfigurationError(
                        f"Unknown breakpoint {name!r}; expected one of {sorted(known)}",
                        option="responsive_items_per_page",
                    )
                _require_positive_int(size, f"responsive_items_per_page[{name}]")

        if self.local_delay < 0:
            raise ConfigurationError(
                "local_delay must not be negative", option="local_delay"
            )
        if self.click_interval < 0:
            raise ConfigurationError(
                "click_interval must not be negative", option="click_interval"
            )
        if not self.history_key:
            raise ConfigurationError(
                "history_key must be a non-empty string", option="history_key"
            )
        if not self.data_key or not self.total_key:
            raise ConfigurationError(
                "data_key and total_key must be non-empty strings",
                option="data_key" if not self.data_key else "total_key",
            )

    @property
    def paged(self) -> bool:
        """Whether navigation is page-indexed rather than incremental."""
        return self.presentation_type is not PresentationType.INCREMENTAL

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "LoadMoreConfig":
        """Build a config from a plain options dictionary.

        Accepts both the snake_case field names and the camelCase names used
        by browser-side widget options (``itemsPerPage``, ``maxDOMItems``,
        ``seoMode`` ...). Unknown keys are rejected.

        Raises:
            ConfigurationError: If an option is unknown or invalid.
        """
        valid = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in options.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in valid:
                raise ConfigurationError(f"Unknown option {key!r}", option=key)
            if key == "seoMode":
                value = RetentionMode.HIDE if value else RetentionMode.REMOVE
            elif key == "useLocalData":
                value = SourceMode.LOCAL if value else SourceMode.REMOTE
            kwargs[name] = value
        return cls(**kwargs)


def _coerce_enum(enum_cls: type[Enum], value: Any, option: str) -> Any:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as ex:
        allowed = [member.value for member in enum_cls]
        raise ConfigurationError(
            f"Invalid {option} {value!r}; expected one of {allowed}", option=option
        ) from ex


def _require_positive_int(value: Any, option: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(
            f"{option} must be a positive integer, got {value!r}", option=option
        )
