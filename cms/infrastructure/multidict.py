"""Multi-valued mapping used for query strings and form posts.

A key owns an ordered list of values. Plain dict access (``d[key]``,
``get``, ``values``, ``items``) sees only the first value of each list;
the ``*list`` methods expose the whole sequence.

    >>> d = MultiDict([('tag', 'python'), ('tag', 'web')])
    >>> d['tag']
    'python'
    >>> d.getlist('tag')
    ['python', 'web']
"""

from copy import deepcopy
from typing import Any, Callable, Dict, Hashable, Iterable, Iterator, List, Mapping, Optional, Tuple, TypeVar

from fastapi import HTTPException


T = TypeVar("T")

_missing = object()


class BadRequestKeyError(KeyError, HTTPException):
    """Raised for a key that is not in a MultiDict.

    Being an HTTPException as well, an unguarded ``form['field']`` inside a
    route handler turns into a 400 response instead of a 500.
    """

    def __init__(self, key: Any) -> None:
        KeyError.__init__(self, key)
        HTTPException.__init__(self, status_code=400, detail=f"Missing required field: {key}")
        self.key = key

    def __str__(self) -> str:
        return KeyError.__str__(self)


def iter_multi_items(mapping: Any) -> Iterator[Tuple[Hashable, Any]]:
    """Yield every ``(key, value)`` pair of a MultiDict, mapping or pair iterable.

    List and tuple values of a plain mapping are expanded into one pair per item.
    """
    if isinstance(mapping, MultiDict):
        yield from mapping.items(multi=True)
    elif isinstance(mapping, Mapping):
        for key, value in mapping.items():
            if isinstance(value, (tuple, list)):
                for item in value:
                    yield key, item
            else:
                yield key, value
    else:
        yield from mapping


class MultiDict(dict):
    """Dictionary subclass holding a list of values per key.

    :param mapping: a MultiDict (its lists are copied), a plain mapping whose
                    list or tuple values become the value list (empty ones
                    are skipped), an iterable of ``(key, value)`` pairs, or
                    ``None``.
    """

    def __init__(self, mapping: Optional[Any] = None) -> None:
        if isinstance(mapping, MultiDict):
            dict.__init__(self, ((k, list(v)) for k, v in mapping.lists()))
        elif isinstance(mapping, Mapping):
            tmp: Dict[Hashable, List[Any]] = {}
            for key, value in mapping.items():
                if isinstance(value, (tuple, list)):
                    if len(value) == 0:
                        continue
                    value = list(value)
                else:
                    value = [value]
                tmp[key] = value
            dict.__init__(self, tmp)
        else:
            tmp = {}
            for key, value in mapping or ():
                tmp.setdefault(key, []).append(value)
            dict.__init__(self, tmp)

    def __getstate__(self) -> Dict[Hashable, List[Any]]:
        return dict(self.lists())

    def __setstate__(self, value: Dict[Hashable, List[Any]]) -> None:
        dict.clear(self)
        dict.update(self, value)

    def __reduce__(self):
        return (self.__class__, (), self.__getstate__())

    def __getitem__(self, key: Hashable) -> Any:
        if key in self:
            lst = dict.__getitem__(self, key)
            if len(lst) > 0:
                return lst[0]
        raise BadRequestKeyError(key)

    def __setitem__(self, key: Hashable, value: Any) -> None:
        dict.__setitem__(self, key, [value])

    def get(self, key: Hashable, default: Any = None, type: Optional[Callable[[Any], T]] = None) -> Any:
        """First value for ``key``, or ``default`` when missing.

        With ``type`` the value is converted; a ValueError or TypeError
        during conversion also yields ``default``.
        """
        try:
            rv = self[key]
        except KeyError:
            return default
        if type is not None:
            try:
                rv = type(rv)
            except (ValueError, TypeError):
                rv = default
        return rv

    def add(self, key: Hashable, value: Any) -> None:
        dict.setdefault(self, key, []).append(value)

    def getlist(self, key: Hashable, type: Optional[Callable[[Any], T]] = None) -> List[Any]:
        """Copy of every value for ``key``; an empty list when missing.

        Values that raise ValueError or TypeError on ``type`` conversion are
        left out of the result.
        """
        try:
            rv = dict.__getitem__(self, key)
        except KeyError:
            return []
        if type is None:
            return list(rv)
        result = []
        for item in rv:
            try:
                result.append(type(item))
            except (ValueError, TypeError):
                pass
        return result

    def setlist(self, key: Hashable, new_list: Iterable[Any]) -> None:
        """Replace the values of ``key`` with a copy of ``new_list``.

        An empty ``new_list`` removes the key.
        """
        values = list(new_list)
        if not values:
            dict.pop(self, key, None)
            return
        dict.__setitem__(self, key, values)

    def setdefault(self, key: Hashable, default: Any = None) -> Any:
        if key not in self:
            self[key] = default
        else:
            default = self[key]
        return default

    def setlistdefault(self, key: Hashable, default_list: Optional[Iterable[Any]] = None) -> List[Any]:
        """Like setdefault for the whole list.

        The returned list is the one stored internally, so appending to it
        adds values for ``key``.
        """
        if key not in self:
            default_list = list(default_list or ())
            dict.__setitem__(self, key, default_list)
        else:
            default_list = dict.__getitem__(self, key)
        return default_list

    def items(self, multi: bool = False) -> Iterator[Tuple[Hashable, Any]]:  # type: ignore[override]
        for key, values in dict.items(self):
            if not values:
                continue
            if multi:
                for value in values:
                    yield key, value
            else:
                yield key, values[0]

    def lists(self) -> Iterator[Tuple[Hashable, List[Any]]]:
        for key, values in dict.items(self):
            yield key, list(values)

    def values(self) -> Iterator[Any]:  # type: ignore[override]
        for values in dict.values(self):
            if values:
                yield values[0]

    def listvalues(self) -> Iterator[List[Any]]:
        return iter(dict.values(self))

    def copy(self) -> "MultiDict":
        return self.__class__(self)

    def deepcopy(self, memo: Optional[Dict[int, Any]] = None) -> "MultiDict":
        return self.__class__(deepcopy(self.to_dict(flat=False), memo))

    def to_dict(self, flat: bool = True) -> Dict[Hashable, Any]:
        """Plain dict of first values, or of value lists when ``flat`` is False."""
        if flat:
            return dict(self.items())
        return dict(self.lists())

    def update(self, other: Any = None, **kwargs: Any) -> None:  # type: ignore[override]
        """Extend the value lists with every pair from ``other`` and ``kwargs``.

        Existing values are kept; use ``setlist`` or item assignment to replace.
        """
        if other is not None:
            for key, value in iter_multi_items(other):
                MultiDict.add(self, key, value)
        for key, value in iter_multi_items(kwargs):
            MultiDict.add(self, key, value)

    def pop(self, key: Hashable, default: Any = _missing) -> Any:
        """Remove ``key`` and return its first value; the other values are dropped."""
        try:
            lst = dict.pop(self, key)
        except KeyError:
            if default is not _missing:
                return default
            raise BadRequestKeyError(key) from None
        if len(lst) == 0:
            if default is not _missing:
                return default
            raise BadRequestKeyError(key)
        return lst[0]

    def popitem(self) -> Tuple[Hashable, Any]:
        try:
            key, values = dict.popitem(self)
        except KeyError as e:
            raise BadRequestKeyError(e.args[0] if e.args else None) from None
        if len(values) == 0:
            raise BadRequestKeyError(key)
        return key, values[0]

    def poplist(self, key: Hashable) -> List[Any]:
        return dict.pop(self, key, [])

    def popitemlist(self) -> Tuple[Hashable, List[Any]]:
        try:
            return dict.popitem(self)
        except KeyError as e:
            raise BadRequestKeyError(e.args[0] if e.args else None) from None

    def __copy__(self) -> "MultiDict":
        return self.copy()

    def __deepcopy__(self, memo: Dict[int, Any]) -> "MultiDict":
        return self.deepcopy(memo=memo)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self.items(multi=True))!r})"
