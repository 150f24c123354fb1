"""
Core help system components.

Usage help is built from named sections. A SectionRegistry keeps the
section keys in display order and maps each key to a renderer. Rendering
walks the keys and concatenates what each renderer returns for the
current HelpContext.
"""

from typing import Callable, Dict, Iterable, List, Optional, Union

from ..log_lib import get_output
from .table import Column, TextTable


# Standard section keys, in default display order
SECTION_KEY_HEADER_HEADING = 'headerHeading'
SECTION_KEY_HEADER = 'header'
SECTION_KEY_SYNOPSIS_HEADING = 'synopsisHeading'
SECTION_KEY_SYNOPSIS = 'synopsis'
SECTION_KEY_DESCRIPTION_HEADING = 'descriptionHeading'
SECTION_KEY_DESCRIPTION = 'description'
SECTION_KEY_PARAMETER_LIST_HEADING = 'parameterListHeading'
SECTION_KEY_PARAMETER_LIST = 'parameterList'
SECTION_KEY_OPTION_LIST_HEADING = 'optionListHeading'
SECTION_KEY_OPTION_LIST = 'optionList'
SECTION_KEY_COMMAND_LIST_HEADING = 'commandListHeading'
SECTION_KEY_COMMAND_LIST = 'commandList'
SECTION_KEY_EXIT_CODE_LIST_HEADING = 'exitCodeListHeading'
SECTION_KEY_EXIT_CODE_LIST = 'exitCodeList'
SECTION_KEY_FOOTER_HEADING = 'footerHeading'
SECTION_KEY_FOOTER = 'footer'

DEFAULT_SECTION_KEYS = [
    SECTION_KEY_HEADER_HEADING,
    SECTION_KEY_HEADER,
    SECTION_KEY_SYNOPSIS_HEADING,
    SECTION_KEY_SYNOPSIS,
    SECTION_KEY_DESCRIPTION_HEADING,
    SECTION_KEY_DESCRIPTION,
    SECTION_KEY_PARAMETER_LIST_HEADING,
    SECTION_KEY_PARAMETER_LIST,
    SECTION_KEY_OPTION_LIST_HEADING,
    SECTION_KEY_OPTION_LIST,
    SECTION_KEY_COMMAND_LIST_HEADING,
    SECTION_KEY_COMMAND_LIST,
    SECTION_KEY_EXIT_CODE_LIST_HEADING,
    SECTION_KEY_EXIT_CODE_LIST,
    SECTION_KEY_FOOTER_HEADING,
    SECTION_KEY_FOOTER,
]

# Narrowest usage width a HelpContext accepts
MINIMUM_USAGE_WIDTH = 55
DEFAULT_USAGE_WIDTH = 80

_BOLD = '\033[1m'
_RESET = '\033[0m'


class AnchorNotFoundError(KeyError):
    """Raised when a section is positioned relative to a key that is not registered."""

    def __init__(self, anchor: str, keys: Iterable[str] = ()):
        self.anchor = anchor
        self.keys = list(keys)
        super().__init__(anchor)

    def __str__(self):
        return (f"Section key '{self.anchor}' not found in help sections "
                f"{self.keys}")


class HelpContext:
    """
    Everything a section renderer may consult while rendering.

    Attributes:
        width: Usage width in display columns
        adjust_cjk: Whether wide CJK characters count as two columns when wrapping
        color: Whether emphasis escapes may be emitted
        parser: The argparse parser being rendered, if any
    """

    def __init__(self, width: int = DEFAULT_USAGE_WIDTH,
                 adjust_cjk: bool = True, color: bool = False,
                 parser=None):
        if width < MINIMUM_USAGE_WIDTH:
            raise ValueError(
                f"Usage width {width} is below the minimum "
                f"of {MINIMUM_USAGE_WIDTH}")
        self.width = width
        self.adjust_cjk = adjust_cjk
        self.color = color
        self.parser = parser

    def emphasize(self, text: str) -> str:
        """Bold the text when color output is enabled."""
        if self.color and text:
            return f"{_BOLD}{text}{_RESET}"
        return text

    def table(self, *columns: Column) -> TextTable:
        """Create a TextTable that follows this context's CJK setting."""
        return TextTable(*columns, adjust_cjk=self.adjust_cjk)

    def __repr__(self):
        return (f"HelpContext(width={self.width}, "
                f"adjust_cjk={self.adjust_cjk}, color={self.color})")


class SectionRenderer:
    """
    Base class for anything that renders one help section.

    Subclasses override render(). Renderers must not mutate the context
    and should return an empty string to leave the section out.
    """

    def render(self, ctx: HelpContext) -> str:
        raise NotImplementedError

    def __call__(self, ctx: HelpContext) -> str:
        return self.render(ctx)


class FunctionRenderer(SectionRenderer):
    """Adapts a plain ``(HelpContext) -> str`` callable to SectionRenderer."""

    def __init__(self, func: Callable[[HelpContext], str]):
        self.func = func

    def render(self, ctx: HelpContext) -> str:
        return self.func(ctx)

    def __repr__(self):
        name = getattr(self.func, '__name__', repr(self.func))
        return f"FunctionRenderer({name})"


RendererLike = Union[SectionRenderer, Callable[[HelpContext], str]]


def _check_unique(keys: List[str]) -> None:
    seen = set()
    for key in keys:
        if key in seen:
            raise ValueError(f"Duplicate help section key: {key}")
        seen.add(key)


class SectionRegistry:
    """
    Ordered help section keys plus the renderer registered for each key.

    Keys without a renderer render as empty. Inserting keys never changes
    the relative order of the keys already present.
    """

    def __init__(self, keys: Optional[Iterable[str]] = None,
                 renderers: Optional[Dict[str, RendererLike]] = None):
        self._keys: List[str] = []
        self._renderers: Dict[str, SectionRenderer] = {}
        self.set_keys(DEFAULT_SECTION_KEYS if keys is None else keys)
        for key, renderer in (renderers or {}).items():
            self.put(key, renderer)

    @property
    def keys(self) -> List[str]:
        """Section keys in display order (a copy)."""
        return list(self._keys)

    def set_keys(self, keys: Iterable[str]) -> None:
        """Replace the section order.

        Raises:
            ValueError: if a key appears twice
        """
        keys = list(keys)
        _check_unique(keys)
        self._keys = keys

    @property
    def renderers(self) -> Dict[str, RendererLike]:
        """The live key -> renderer mapping.

        Values written here directly may be plain ``(HelpContext) -> str``
        callables; render() calls them the same way as SectionRenderers.
        """
        return self._renderers

    def put(self, key: str, renderer: RendererLike) -> None:
        """Register (or replace) the renderer for a key."""
        if not isinstance(renderer, SectionRenderer):
            if not callable(renderer):
                raise TypeError(
                    f"Renderer for '{key}' must be callable, "
                    f"got {type(renderer).__name__}")
            renderer = FunctionRenderer(renderer)
        self._renderers[key] = renderer

    def get(self, key: str) -> Optional[SectionRenderer]:
        return self._renderers.get(key)

    def index(self, key: str) -> int:
        """Position of key in the section order.

        Raises:
            AnchorNotFoundError: if the key is not present
        """
        try:
            return self._keys.index(key)
        except ValueError:
            raise AnchorNotFoundError(key, self._keys) from None

    def _insert_at(self, position: int, new_keys) -> None:
        for key in new_keys:
            if key in self._keys:
                raise ValueError(f"Help section key already present: {key}")
        _check_unique(list(new_keys))
        self._keys[position:position] = list(new_keys)

    def insert_before(self, anchor: str, *new_keys: str) -> None:
        """Insert new_keys, in the given order, directly before anchor."""
        position = self.index(anchor)
        self._insert_at(position, new_keys)
        get_output().emit(2, "Inserted sections {keys} before '{anchor}'",
                          channel='help', keys=list(new_keys), anchor=anchor)

    def insert_after(self, anchor: str, *new_keys: str) -> None:
        """Insert new_keys, in the given order, directly after anchor."""
        position = self.index(anchor) + 1
        self._insert_at(position, new_keys)
        get_output().emit(2, "Inserted sections {keys} after '{anchor}'",
                          channel='help', keys=list(new_keys), anchor=anchor)

    def remove(self, key: str) -> None:
        """Remove a key and its renderer.

        Raises:
            KeyError: if the key is not in the section order
        """
        if key not in self._keys:
            raise KeyError(key)
        self._keys.remove(key)
        self._renderers.pop(key, None)

    def render(self, ctx: HelpContext) -> str:
        """Render every section in order and join the results."""
        out = get_output()
        parts = []
        for key in self._keys:
            renderer = self._renderers.get(key)
            if renderer is None:
                continue
            text = renderer(ctx)
            if text:
                out.emit(1, "Rendered section '{key}' ({n} chars)",
                         channel='help', key=key, n=len(text))
                parts.append(text)
        return ''.join(parts)

    def __contains__(self, key: str) -> bool:
        return key in self._keys

    def __iter__(self):
        return iter(list(self._keys))

    def __len__(self):
        return len(self._keys)
