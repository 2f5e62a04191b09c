"""Switching an application's display language from a configured list."""

from __future__ import annotations

import locale
import os
from contextlib import contextmanager
from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, List, Optional

from .menu import Menu, MenuAction
from .texttranslator import (
    CatalogTranslator,
    TextTranslator,
    Translator,
    TranslatorHost,
    _read_ini,
    _to_bool,
)

LANGUAGES_INI = "languages.ini"
LANGUAGE_DEFAULT = "English"
SETTINGS_GROUP = "QLanguageSelector"
FORCE_TEXT_MENU_TEXT = "Always use text translation"
FORCE_TEXT_MENU_COMMENT = "Menu text that uses textual translation rather than compiled catalogs"


@dataclass(frozen=True)
class LanguageInfo:
    """One language entry of the languages file.

    code: locale code such as 'en' or 'en_US'.
    caption: human-readable name, also the language id.
    qm: compiled catalog file name.
    text_file: editable INI translation file name.
    open_text_editor: ask for the text file to be opened when chosen.
    """

    code: str = ""
    caption: str = ""
    qm: str = ""
    text_file: str = ""
    open_text_editor: bool = False


def _locale_name(code: str) -> str:
    code = code.strip().replace("-", "_")
    if not code:
        return "C"
    normalized = locale.normalize(code)
    return normalized.split(".")[0].split("@")[0]


def _current_system_locale() -> str:
    try:
        name = locale.getlocale()[0]
    except ValueError:
        name = None
    return name or "C"


class LanguageSelector:
    """Loads the language list and installs the translator for the chosen language."""

    def __init__(self, prefix, path="translations/", host=None, system_locale=None):
        self.prefix = prefix
        self.path = os.fspath(path)
        self.host = host if host is not None else TranslatorHost()
        self.system_locale: Optional[str] = system_locale
        self.force_use_text = False
        self.reverse_file = ""
        self.user_selecting = False
        self._ui_language = ""
        self._translator: Optional[Translator] = None
        self._reversed: Optional[TextTranslator] = None
        self._text_editor_opened = False
        self._languages: Dict[str, LanguageInfo] = {}
        self._language_list: List[str] = []
        self._actions: List[MenuAction] = []
        self._language_changed: List[Callable[[str], object]] = []
        self._open_text_editor: List[Callable[[LanguageInfo], object]] = []

    def language(self):
        """The caption of the language currently in use."""
        return self._ui_language

    def initialize(self, path=""):
        """Read the languages file (by default ``<path>/languages.ini``)."""
        ini_path = path or os.path.join(self.path, LANGUAGES_INI)
        for group, values in _read_ini(ini_path).items():
            if group == SETTINGS_GROUP:
                self.reverse_file = values.get("ReverseFile", "")
                self.force_use_text = _to_bool(values.get("ForceUseText", ""))
                continue
            info = LanguageInfo(
                code=values.get("Code", ""),
                caption=values.get("Caption", ""),
                qm=values.get("Qm", ""),
                text_file=values.get("TextFile", ""),
                open_text_editor=_to_bool(values.get("OpenTextEditor", "")),
            )
            self._languages[info.caption] = info
            self._language_list.append(info.caption)

    def initialize_menu(self, parent: Menu):
        """Add a checkable entry for each language to *parent*."""
        use_text = False
        for caption in self._language_list:
            info = self._languages.get(caption, LanguageInfo())
            if info.text_file:
                use_text = True
            if info.open_text_editor:
                parent.add_separator()
            action = parent.add_action(info.caption)
            action.checkable = True
            action.checked = self._ui_language == info.caption
            action.connect(partial(self._choose, action, info))
            self._actions.append(action)
        if use_text:
            parent.add_separator()
            text = self.host.translate(SETTINGS_GROUP, FORCE_TEXT_MENU_TEXT, FORCE_TEXT_MENU_COMMENT)
            action = parent.add_action(text)
            action.checkable = True
            action.checked = self.force_use_text
            action.connect(self._toggle_force_use_text)

    def get_language_info(self, language_id):
        """Return the entry for *language_id*, or the one matching the system locale."""
        if language_id in self._languages:
            return self._languages[language_id]
        return self.get_system_language_info()

    def get_system_language_info(self):
        """Return the entry matching the system locale, else the default language."""
        system_name = _locale_name(self.system_locale or _current_system_locale())
        for caption in self._language_list:
            info = self._languages.get(caption, LanguageInfo())
            if _locale_name(info.code) == system_name:
                return info
        return self._languages.get(LANGUAGE_DEFAULT, LanguageInfo())

    def reset_translator(self, language_id):
        """Replace the installed translator with the one for *language_id*."""
        info = self.get_language_info(language_id)
        self._ui_language = info.caption
        if self._translator is not None:
            self.host.remove_translator(self._translator)
            self._translator = None

        if info.text_file and (self.force_use_text or info.open_text_editor):
            if self._reversed is None and self.reverse_file:
                self._reversed = TextTranslator(os.path.join(self.path, self.reverse_file))
            if self._reversed is not None:
                self._translator = TextTranslator(
                    os.path.join(self.path, info.text_file), self._reversed
                )
                self.host.install_translator(self._translator)
        else:
            catalog = CatalogTranslator()
            if catalog.load(info.code, self.prefix, self.path):
                self._translator = catalog
                self.host.install_translator(catalog)

        for callback in list(self._language_changed):
            callback(info.caption)

    def on_language_changed(self, callback):
        """Call *callback* with the caption after each language change."""
        self._language_changed.append(callback)
        return callback

    def on_open_text_editor(self, callback):
        """Call *callback* with the LanguageInfo whose text file should be opened."""
        self._open_text_editor.append(callback)
        return callback

    def copy_languages(self, languages):
        self._languages = dict(languages)

    def languages(self):
        return self._languages

    @contextmanager
    def _selecting(self):
        self.user_selecting = True
        try:
            yield
        finally:
            self.user_selecting = False

    def _choose(self, action: MenuAction, info: LanguageInfo):
        for other in self._actions:
            other.checked = False
        action.checked = True
        with self._selecting():
            self.reset_translator(info.caption)
        if not self._text_editor_opened and info.open_text_editor:
            for callback in list(self._open_text_editor):
                callback(info)
            self._text_editor_opened = True

    def _toggle_force_use_text(self):
        self.force_use_text = not self.force_use_text
        with self._selecting():
            self.reset_translator(self._ui_language)