import struct

import pytest

from langselect.texttranslator import (
    CatalogTranslator,
    TextTranslator,
    Translator,
    TranslatorHost,
)

MAGIC = 0x950412DE


def _write(path, text):
    path.write_text(text, encoding="utf-8")
    return path


def _mo_bytes(messages, order="<", revision=0):
    items = sorted(messages.items())
    ids = [key.encode("utf-8") for key, _ in items]
    strs = [value.encode("utf-8") for _, value in items]
    count = len(items)
    originals = 28
    translations = originals + 8 * count
    offset = translations + 8 * count
    entries = []
    blob = b""
    for raw in ids + strs:
        entries.append((len(raw), offset))
        blob += raw + b"\0"
        offset += len(raw) + 1
    header = struct.pack(order + "7I", MAGIC, revision, count, originals, translations, 0, 0)
    return header + b"".join(struct.pack(order + "2I", *e) for e in entries) + blob


@pytest.fixture
def reverse_file(tmp_path):
    return _write(
        tmp_path / "reverse.ini",
        "[MainWindow]\ntext_1=Open file\ntext_2=Save file\n\n[Dialog]\ntext_3=Cancel\n",
    )


@pytest.fixture
def french_file(tmp_path):
    return _write(
        tmp_path / "french.ini",
        "[MainWindow]\ntext_1=Ouvrir\ntext_2=Enregistrer\ntext_9=Orphelin\n\n"
        "[Dialog]\ntext_3=Annuler\n",
    )


def test_translate_by_source_text_through_reverse(reverse_file, french_file):
    translator = TextTranslator(french_file, TextTranslator(reverse_file))
    assert translator.translate("MainWindow", "Open file") == "Ouvrir"
    assert translator.translate("MainWindow", "Save file") == "Enregistrer"
    assert translator.translate("Dialog", "Cancel") == "Annuler"


def test_key_unknown_to_reverse_is_kept(reverse_file, french_file):
    translator = TextTranslator(french_file, TextTranslator(reverse_file))
    assert translator.get_string("MainWindow", "text_9") == "Orphelin"
    assert translator.get_string("MainWindow", "text_1") is None


def test_without_reverse_keys_are_used(french_file):
    translator = TextTranslator(french_file)
    assert translator.get_string("MainWindow", "text_1") == "Ouvrir"
    assert translator.translate("MainWindow", "Open file") is None


def test_reverse_maps_ids_to_sources(reverse_file):
    assert TextTranslator(reverse_file).get_string("MainWindow", "text_1") == "Open file"


def test_missing_group_or_key(french_file):
    translator = TextTranslator(french_file)
    assert translator.get_string("Nowhere", "text_1") is None
    assert translator.get_string("Dialog", "text_1") is None


def test_missing_file_is_not_empty(tmp_path):
    translator = TextTranslator(tmp_path / "absent.ini")
    assert translator.is_empty() is False
    assert translator.translate("MainWindow", "Open file") is None


def test_quoted_and_escaped_values(tmp_path):
    path = _write(tmp_path / "t.ini", '[G]\na="Line\\none"\nb=caf\\x00e9\nc=" padded "\n')
    translator = TextTranslator(path)
    assert translator.get_string("G", "a") == "Line\none"
    assert translator.get_string("G", "b") == "café"
    assert translator.get_string("G", "c") == " padded "


def test_root_keys_and_comments_ignored(tmp_path):
    path = _write(tmp_path / "t.ini", "; note\nroot=1\n[General]\nother=2\n[G]\n# c\nk=v\n")
    translator = TextTranslator(path)
    assert translator.get_string("General", "root") is None
    assert translator.get_string("General", "other") is None
    assert translator.get_string("G", "k") == "v"


def test_keys_are_case_sensitive(tmp_path):
    translator = TextTranslator(_write(tmp_path / "t.ini", "[G]\nKey=A\nkey=b\n"))
    assert translator.get_string("G", "Key") == "A"
    assert translator.get_string("G", "key") == "b"


def test_base_translator_knows_nothing():
    translator = Translator()
    assert translator.translate("c", "s") is None
    assert translator.is_empty() is True


def test_host_falls_back_to_source():
    assert TranslatorHost().translate("MainWindow", "Open file") == "Open file"


def test_host_prefers_latest_translator(tmp_path, reverse_file, french_file):
    reverse = TextTranslator(reverse_file)
    french = TextTranslator(french_file, reverse)
    host = TranslatorHost()
    assert host.install_translator(french) is True
    assert host.install_translator(reverse) is True
    assert host.translators() == [reverse, french]
    assert host.translate("MainWindow", "Open file") == "Ouvrir"
    assert host.translate("MainWindow", "text_1") == "Open file"


def test_host_remove_translator(french_file, reverse_file):
    french = TextTranslator(french_file, TextTranslator(reverse_file))
    host = TranslatorHost()
    host.install_translator(french)
    assert host.remove_translator(french) is True
    assert host.remove_translator(french) is False
    assert host.translate("Dialog", "Cancel") == "Cancel"


def test_host_install_empty_translator():
    host = TranslatorHost()
    catalog = CatalogTranslator()
    assert host.install_translator(catalog) is False
    assert host.translators() == [catalog]
    assert host.install_translator(None) is False


def test_host_replaces_percent_n():
    host = TranslatorHost()
    assert host.translate("c", "%n files", n=3) == "3 files"
    assert host.translate("c", "%n files") == "%n files"


def test_catalog_load_and_translate(tmp_path):
    (tmp_path / "app_fr.mo").write_bytes(
        _mo_bytes({"": "header", "MainWindow\x04Open file": "Ouvrir", "Quit": "Quitter"})
    )
    catalog = CatalogTranslator()
    assert catalog.load("fr_FR", "app_", tmp_path) is True
    assert catalog.file_path.endswith("app_fr.mo")
    assert catalog.is_empty() is False
    assert catalog.translate("MainWindow", "Open file") == "Ouvrir"
    assert catalog.translate("Other", "Quit") == "Quitter"
    assert catalog.translate("Other", "Open file") is None
    assert catalog.translate("c", "") is None


def test_catalog_prefers_specific_code(tmp_path):
    (tmp_path / "app_fr.mo").write_bytes(_mo_bytes({"Quit": "general"}))
    (tmp_path / "app_fr_CA.mo").write_bytes(_mo_bytes({"Quit": "specific"}))
    catalog = CatalogTranslator()
    assert catalog.load("fr-CA", "app_", tmp_path) is True
    assert catalog.translate("c", "Quit") == "specific"


def test_catalog_big_endian(tmp_path):
    (tmp_path / "app_de.mo").write_bytes(_mo_bytes({"Quit": "Beenden"}, order=">"))
    catalog = CatalogTranslator()
    assert catalog.load("de", "app_", tmp_path) is True
    assert catalog.translate("c", "Quit") == "Beenden"


def test_catalog_missing_file(tmp_path):
    catalog = CatalogTranslator()
    assert catalog.load("fr", "app_", tmp_path) is False
    assert catalog.is_empty() is True
    assert catalog.file_path is None


@pytest.mark.parametrize(
    "content",
    [b"garbage data that is long enough", b"\x00\x01", _mo_bytes({"a": "b"}, revision=2 << 16)],
)
def test_catalog_invalid_file(tmp_path, content):
    (tmp_path / "app_fr.mo").write_bytes(content)
    catalog = CatalogTranslator()
    assert catalog.load("fr", "app_", tmp_path) is False
    assert catalog.is_empty() is True


def test_catalog_reload_clears_previous(tmp_path):
    (tmp_path / "app_fr.mo").write_bytes(_mo_bytes({"Quit": "Quitter"}))
    catalog = CatalogTranslator()
    assert catalog.load("fr", "app_", tmp_path) is True
    assert catalog.load("it", "app_", tmp_path) is False
    assert catalog.translate("c", "Quit") is None