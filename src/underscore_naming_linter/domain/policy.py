"""Static naming policy: component-type field prefixes and handler method prefixes."""

import re
from dataclasses import dataclass, field
from typing import Optional

from underscore_naming_linter.domain.constants import PRIVATE_FIELD_MARKER
from underscore_naming_linter.domain.entities import Accessibility


def title_form(prefix: str) -> str:
    """'btn' / 'Btn_' -> 'Btn_' (public field prefix form)."""
    stem = prefix.replace("_", "")
    return stem[:1].upper() + stem[1:] + "_"


def camel_form(prefix: str) -> str:
    """'Btn_' / 'btn' -> 'btn' (private field prefix form, without the leading '_')."""
    stem = prefix.replace("_", "")
    return stem[:1].lower() + stem[1:]


def prefix_stem_pattern(stem: str) -> "re.Pattern[str]":
    """Case-insensitive pattern for ``stem`` that tolerates underscores between its letters."""
    return re.compile("_*".join(re.escape(ch) for ch in stem), re.IGNORECASE)


@dataclass(frozen=True)
class ResolvedPrefix:
    """A field prefix resolved for a declared type, in both spellings."""
    type_key: str
    public: str
    private: str

    @property
    def stem(self) -> str:
        return self.private

    def expected_for(self, accessibility: Accessibility) -> str:
        """The literal text a compliant name starts with."""
        if accessibility is Accessibility.PUBLIC:
            return self.public
        return PRIVATE_FIELD_MARKER + self.private


@dataclass(frozen=True)
class PrefixPolicy:
    """
    Two ordered type-name -> prefix tables.

    Public prefixes are title-cased with a trailing separator ("Btn_"); private
    prefixes are lower camel without separator ("btn"). A key may appear in
    only one of the tables.
    """
    public_prefixes: tuple[tuple[str, str], ...]
    private_prefixes: tuple[tuple[str, str], ...]

    def resolve(self, type_name: Optional[str], accessibility: Accessibility) -> Optional[ResolvedPrefix]:
        """
        Resolve the expected prefix for ``type_name``.

        The table matching ``accessibility`` is primary, the other is the
        fallback. Exact (case-insensitive) key matches win; otherwise the first
        key contained in the type name is used, scanning the primary table and
        then the fallback table in declaration order.
        """
        if not type_name:
            return None
        if accessibility is Accessibility.PUBLIC:
            ordered = self.public_prefixes + self.private_prefixes
        else:
            ordered = self.private_prefixes + self.public_prefixes

        lowered = type_name.lower()
        for key, prefix in ordered:
            if key.lower() == lowered:
                return self._resolved(key, prefix)
        for key, prefix in ordered:
            if key.lower() in lowered:
                return self._resolved(key, prefix)
        return None

    @staticmethod
    def _resolved(key: str, prefix: str) -> ResolvedPrefix:
        return ResolvedPrefix(type_key=key, public=title_form(prefix), private=camel_form(prefix))


@dataclass(frozen=True)
class MethodPrefixAllowList:
    """
    Ordered exact-cased handler prefixes ("OnClick_", "RPC_").

    No prefix may start with another one, so a method name starts with at
    most one of them.
    """
    prefixes: tuple[str, ...]
    _patterns: tuple["re.Pattern[str]", ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for prefix in self.prefixes:
            if not prefix.endswith("_"):
                raise ValueError(f"Allow-listed prefix {prefix!r} must end with '_'")
            for other in self.prefixes:
                if other != prefix and other.startswith(prefix):
                    raise ValueError(f"Allow-listed prefixes {prefix!r} and {other!r} overlap")
        object.__setattr__(
            self, "_patterns", tuple(prefix_stem_pattern(self.stem(p)) for p in self.prefixes)
        )

    @staticmethod
    def stem(prefix: str) -> str:
        return prefix.replace("_", "")

    def match_exact(self, name: str) -> Optional[str]:
        """First prefix the name literally starts with."""
        for prefix in self.prefixes:
            if name.startswith(prefix):
                return prefix
        return None

    def match_fuzzy(self, name: str) -> Optional[str]:
        """First prefix whose stem occurs in the lowercased, underscore-free name."""
        squashed = name.replace("_", "").lower()
        for prefix in self.prefixes:
            if self.stem(prefix).lower() in squashed:
                return prefix
        return None

    def locate(self, name: str, prefix: str) -> Optional["re.Match[str]"]:
        """Leftmost case-insensitive occurrence of the prefix stem inside ``name``."""
        return self._patterns[self.prefixes.index(prefix)].search(name)


@dataclass(frozen=True)
class NamingPolicy:
    """The complete, immutable naming policy handed to the evaluator and canonicalizer."""
    prefixes: PrefixPolicy
    method_prefixes: MethodPrefixAllowList


DEFAULT_PREFIX_POLICY = PrefixPolicy(
    public_prefixes=(
        ("Button", "Btn_"),
        ("Image", "Img_"),
        ("RawImage", "RawImg_"),
        ("Text", "Txt_"),
        ("TextMeshProUGUI", "Tmp_"),
        ("TMP_Text", "Tmp_"),
        ("InputField", "Input_"),
        ("TMP_InputField", "Input_"),
        ("Toggle", "Tog_"),
        ("Slider", "Sld_"),
        ("Scrollbar", "Sb_"),
        ("ScrollRect", "Scroll_"),
        ("Dropdown", "Dd_"),
        ("TMP_Dropdown", "Dd_"),
        ("CanvasGroup", "Cg_"),
        ("Canvas", "Canvas_"),
        ("RectTransform", "Rt_"),
        ("Transform", "Tf_"),
        ("GameObject", "Go_"),
        ("Animator", "Anim_"),
        ("AudioSource", "Audio_"),
        ("Camera", "Cam_"),
    ),
    private_prefixes=(
        ("Button", "btn"),
        ("Image", "img"),
        ("RawImage", "rawImg"),
        ("Text", "txt"),
        ("TextMeshProUGUI", "tmp"),
        ("InputField", "input"),
        ("Toggle", "tog"),
        ("Slider", "sld"),
        ("ScrollRect", "scroll"),
        ("Dropdown", "dd"),
        ("CanvasGroup", "cg"),
        ("RectTransform", "rt"),
        ("Transform", "tf"),
        ("GameObject", "go"),
        ("Animator", "anim"),
        ("AudioSource", "audio"),
        ("ParticleSystem", "ps"),
        ("SpriteRenderer", "sr"),
        ("Rigidbody", "rb"),
    ),
)

DEFAULT_METHOD_PREFIXES = MethodPrefixAllowList(
    prefixes=(
        "OnClick_",
        "BtnClick_",
        "OnValueChanged_",
        "OnToggle_",
        "RPC_",
    )
)

DEFAULT_POLICY = NamingPolicy(
    prefixes=DEFAULT_PREFIX_POLICY,
    method_prefixes=DEFAULT_METHOD_PREFIXES,
)
