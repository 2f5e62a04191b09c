# langselect

Let the users of an application switch its display language at run time.

The languages an application offers are described in an INI file
(`translations/languages.ini` by default), so new languages can be added
without touching code. Besides compiled message catalogs (`.mo` files),
langselect supports plain-text INI translation files that end users can
edit directly.

## languages.ini

```ini
[QLanguageSelector]
ReverseFile=reverse.ini
ForceUseText=false

[English]
Code=en
Caption=English

[Japanese]
Code=ja
Caption=Japanese
TextFile=ja.ini
OpenTextEditor=false
```

Every section other than `QLanguageSelector` describes one language and
becomes a `LanguageInfo` with the fields `code`, `caption`, `qm`,
`text_file` and `open_text_editor`. The caption is the language id.
The `Qm` value is read into `qm` but is not used for loading.

## How a translator is chosen

`LanguageSelector.reset_translator(language_id)` removes the translator it
installed before, then:

- if the language has a `TextFile` and either `ForceUseText` is on or the
  language has `OpenTextEditor` set, it builds a `TextTranslator` from that
  file. The keys of a text file (such as `text_100003`) are mapped back to
  source strings through the `ReverseFile`; without a `ReverseFile` no text
  translator is installed.
- otherwise it builds a `CatalogTranslator` and loads
  `<path>/<prefix><code>.mo`, trying less specific codes in turn
  (`ja_JP`, then `ja`). If nothing is found, no translator is installed.

Finally every callback registered with `on_language_changed` is called
with the caption.

An unknown language id falls back to the language whose code matches the
system locale (or the `system_locale` given to the constructor), and then
to the `English` entry.

## Usage

```python
from langselect.languageselector import LanguageSelector
from langselect.menu import Menu
from langselect.texttranslator import TranslatorHost

host = TranslatorHost()
selector = LanguageSelector("app_", "translations/", host, None)
selector.initialize("")

selector.on_language_changed(lambda caption: print("now using", caption))
selector.on_open_text_editor(lambda info: print("edit", info.text_file))

selector.reset_translator("Japanese")
print(selector.language())
print(host.translate("MainWindow", "Open", None, -1))

menu = Menu()
selector.initialize_menu(menu)
menu.find("English").trigger()
```

`TranslatorHost.translate` asks the installed translators, most recent
first, and returns the source text when none knows it; with `n >= 0` it
replaces `%n` in the result by `n`.

`initialize_menu` adds a checkable action for each language (preceded by a
separator for languages with `OpenTextEditor`) and, when any language has a
text file, an "Always use text translation" action that toggles
`force_use_text`. Choosing a language with `OpenTextEditor` calls the
`on_open_text_editor` callbacks once per selector.

## Main names

- `langselect.texttranslator`: `Translator`, `TextTranslator`,
  `CatalogTranslator`, `TranslatorHost`
- `langselect.menu`: `Menu`, `MenuAction`
- `langselect.languageselector`: `LanguageInfo`, `LanguageSelector`

## What it does not do

`Menu` and `MenuAction` are a plain in-memory model of menu entries; no
widget toolkit is attached, so showing the menu is up to the application.
langselect does not open a text editor itself: it only calls the
`on_open_text_editor` callbacks. It does not compile `.mo` catalogs, and it
has no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```