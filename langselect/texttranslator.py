"""Translators for editable INI text catalogs and compiled message catalogs."""

from __future__ import annotations

import os
import re
import struct
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple

MO_SUFFIX = ".mo"

_ROOT_SECTION = "General"
_MO_MAGIC = 0x950412DE
_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}
_ESCAPE_RE = re.compile(r"\\(x[0-9A-Fa-f]{1,4}|.)")
_PERCENT_N_RE = re.compile(r"%L?n")


def _unescape(text: str) -> str:
    def replace(match: re.Match) -> str:
        token = match.group(1)
        if token.startswith("x") and len(token) > 1:
            return chr(int(token[1:], 16))
        return _ESCAPES.get(token, token)

    return _ESCAPE_RE.sub(replace, text)


def _parse_value(raw: str) -> str:
    value = raw.strip()
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        value = value[1:-1]
    return _unescape(value)


def _read_ini(path) -> Dict[str, Dict[str, str]]:
    """Read an INI file into sorted groups of sorted keys; a missing file reads as empty."""
    try:
        text = Path(path).read_text(encoding="utf-8-sig")
    except OSError:
        return {}
    sections: Dict[str, Dict[str, str]] = {}
    current = sections.setdefault(_ROOT_SECTION, {})
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line[0] in ";#":
            continue
        if line.startswith("[") and line.endswith("]"):
            current = sections.setdefault(line[1:-1].strip(), {})
            continue
        key, sep, value = line.partition("=")
        key = key.strip()
        if sep and key:
            current[key] = _parse_value(value)
    return {
        group: dict(sorted(entries.items()))
        for group, entries in sorted(sections.items())
        if group != _ROOT_SECTION and entries
    }


def _to_bool(value: str) -> bool:
    return value.strip().lower() not in ("", "0", "false")


class Translator:
    """A translator that knows no messages."""

    def translate(self, context, source_text, disambiguation=None, n=-1):
        """Return the translation of *source_text*, or None when unknown."""
        return None

    def is_empty(self):
        return True


class TextTranslator(Translator):
    """Translations read from a user-editable INI file.

    Each group is a context and each key an opaque message id. When a
    *reverse* translator is given, it maps the same ids back to the source
    texts, so lookups can be made by source text.
    """

    def __init__(self, path, reverse=None):
        self.path = os.fspath(path)
        self.reverse = reverse
        self._messages: Dict[str, Dict[str, str]] = {}
        for group, entries in _read_ini(self.path).items():
            table: Dict[str, str] = {}
            for key, message in entries.items():
                original = (reverse.get_string(group, key) if reverse is not None else None) or ""
                table[original or key] = message
            self._messages[group] = table

    def translate(self, context, source_text, disambiguation=None, n=-1):
        return self.get_string(context, source_text)

    def get_string(self, group, key):
        """Return the message stored under *group* and *key*, or None."""
        return self._messages.get(group, {}).get(key)

    def is_empty(self):
        return False


def _parse_mo(data: bytes) -> Dict[Tuple[Optional[str], str], str]:
    if len(data) < 20:
        raise ValueError("truncated message catalog header")
    for order in "<>":
        (magic,) = struct.unpack_from(order + "I", data)
        if magic == _MO_MAGIC:
            break
    else:
        raise ValueError("not a message catalog")
    revision, count, originals, translations = struct.unpack_from(order + "4I", data, 4)
    if revision >> 16 > 1:
        raise ValueError(f"unsupported message catalog revision {revision >> 16}")

    def table(offset: int) -> Iterator[Tuple[int, int]]:
        end = offset + 8 * count
        if end > len(data):
            raise ValueError("message catalog table out of range")
        return struct.iter_unpack(order + "2I", data[offset:end])

    def string(length: int, offset: int) -> str:
        if offset + length > len(data):
            raise ValueError("message catalog string out of range")
        return data[offset:offset + length].decode("utf-8")

    messages: Dict[Tuple[Optional[str], str], str] = {}
    for (olen, ooff), (tlen, toff) in zip(table(originals), table(translations)):
        msgid = string(olen, ooff).split("\0")[0]
        if not msgid:
            continue
        context, sep, text = msgid.partition("\x04")
        key = (context, text) if sep else (None, msgid)
        messages[key] = string(tlen, toff).split("\0")[0]
    return messages


def _is_readable_file(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.R_OK)


def _catalog_candidates(code: str, prefix: str, directory) -> Iterator[str]:
    directory = os.fspath(directory)
    base = os.path.join(directory, prefix) if directory else prefix
    name = code.strip().replace("-", "_")
    while name:
        yield base + name + MO_SUFFIX
        yield base + name
        head, _, _ = name.rpartition("_")
        if not head:
            break
        name = head
    yield base


class CatalogTranslator(Translator):
    """Translations loaded from a compiled message catalog (.mo)."""

    def __init__(self):
        self.file_path: Optional[str] = None
        self._messages: Dict[Tuple[Optional[str], str], str] = {}

    def load(self, code, prefix="", directory=""):
        """Load ``<directory>/<prefix><code>.mo``, trying less specific codes in turn.

        Returns True when a catalog was found and read.
        """
        self.file_path = None
        self._messages = {}
        path = next(
            (candidate for candidate in _catalog_candidates(code, prefix, directory)
             if _is_readable_file(candidate)),
            None,
        )
        if path is None:
            return False
        try:
            messages = _parse_mo(Path(path).read_bytes())
        except (OSError, ValueError):
            return False
        self.file_path = path
        self._messages = messages
        return True

    def translate(self, context, source_text, disambiguation=None, n=-1):
        for key in ((context, source_text), (None, source_text)):
            if key in self._messages:
                return self._messages[key]
        return None

    def is_empty(self):
        return not self._messages


class TranslatorHost:
    """Holds the installed translators; the most recently installed is asked first."""

    def __init__(self):
        self._translators = []

    def install_translator(self, translator):
        """Install *translator*; returns False when it is None or holds no messages."""
        if translator is None:
            return False
        self._translators.insert(0, translator)
        return not translator.is_empty()

    def remove_translator(self, translator):
        try:
            self._translators.remove(translator)
        except ValueError:
            return False
        return True

    def translate(self, context, source_text, disambiguation=None, n=-1):
        """Translate through the installed translators, falling back to *source_text*."""
        for translator in self._translators:
            text = translator.translate(context, source_text, disambiguation, n)
            if text is not None:
                break
        else:
            text = source_text
        if n >= 0:
            text = _PERCENT_N_RE.sub(str(n), text)
        return text

    def translators(self):
        return list(self._translators)