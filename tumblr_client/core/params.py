"""Request parameter bag and path helpers."""

from typing import Iterable, Iterator, Mapping, Optional, Union

ParamValue = Union[str, int, Iterable[str], Iterable[int]]

BLOG_DOMAIN = "tumblr.com"


class Params:
    """String-keyed, multi-valued request parameters (query/form semantics).

    Each key maps to a list of string values. ``copy()`` returns an
    independent bag: changes to the copy never show up in the original.
    """

    def __init__(self, values: Optional[Mapping[str, ParamValue]] = None):
        self._values: dict[str, list[str]] = {}
        if values:
            for key, value in values.items():
                if isinstance(value, (str, int)):
                    self.set(key, value)
                else:
                    self._values[key] = [str(v) for v in value]

    def get(self, key: str) -> str:
        """First value for key, or "" when absent."""
        values = self._values.get(key)
        if not values:
            return ""
        return values[0]

    def get_all(self, key: str) -> list[str]:
        return list(self._values.get(key, []))

    def set(self, key: str, value: Union[str, int]) -> "Params":
        """Replace every value of key with a single value."""
        self._values[key] = [str(value)]
        return self

    def add(self, key: str, value: Union[str, int]) -> "Params":
        self._values.setdefault(key, []).append(str(value))
        return self

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def copy(self) -> "Params":
        dest = Params()
        dest._values = {k: list(v) for k, v in self._values.items()}
        return dest

    def to_dict(self) -> dict[str, list[str]]:
        """Plain dict for requests (lists are sent as repeated keys)."""
        return {k: list(v) for k, v in self._values.items()}

    def keys(self) -> list[str]:
        return list(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Params):
            return self._values == other._values
        return NotImplemented

    def __repr__(self) -> str:
        return f"Params({self._values!r})"


def as_params(params: "ParamsLike") -> Params:
    """Coerce None or a plain mapping into a Params, copying it.

    Operations call this on every caller-supplied bag so the caller's
    object is never modified.
    """
    if params is None:
        return Params()
    if isinstance(params, Params):
        return params.copy()
    return Params(params)


def set_param_int(value: int, params: Params, key: str) -> Params:
    return params.set(key, int(value))


def set_post_id(post_id: int, params: Params) -> Params:
    return set_param_int(post_id, params, "id")


def normalize_blog_name(name: str) -> str:
    """Append the default blog domain to bare names (no dot)."""
    if "." not in name:
        name = f"{name}.{BLOG_DOMAIN}"
    return name


def blog_path(path: str, name: str) -> str:
    """Fill the single %s placeholder in path with the normalized blog name."""
    return path % normalize_blog_name(name)


def param_int(params: Params, key: str) -> int:
    """Integer value of key, 0 when absent or not numeric."""
    try:
        return int(params.get(key))
    except ValueError:
        return 0


ParamsLike = Optional[Union[Params, Mapping[str, ParamValue]]]
