import json

import pytest

from src.label_parsing.domain.exceptions import (
    LabelDataFormatError,
    LabelFileNotFoundError,
    LabelFileWriteError,
)
from src.label_parsing.infrastructure import LabelFileManager


@pytest.fixture
def file_manager():
    return LabelFileManager()


def write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_save_and_load_json(tmp_path, file_manager):
    path = file_manager.save_json({"poNumber": "ЗАКАЗ-1"}, tmp_path / "nested" / "out.json")

    assert path.exists()
    assert file_manager.load_json(path) == {"poNumber": "ЗАКАЗ-1"}


def test_load_missing_file(tmp_path, file_manager):
    with pytest.raises(LabelFileNotFoundError):
        file_manager.load_json(tmp_path / "absent.json")


def test_load_broken_json(tmp_path, file_manager):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(LabelFileWriteError) as exc_info:
        file_manager.load_json(path)
    assert exc_info.value.original_error is not None


def test_save_unserializable(tmp_path, file_manager):
    with pytest.raises(LabelFileWriteError):
        file_manager.save_json({"value": object()}, tmp_path / "bad.json")


def test_load_capture_camel_case(tmp_path, file_manager):
    path = write_json(tmp_path / "label_01.json", {
        "rawBarcodes": [{"value": "1Z1Y798F0301700550", "symbology": "CODE_128"}],
        "ocrLines": [{"text": "PO: 82427365A"}],
        "imageUri": "file:///label_01.jpg",
    })
    capture = file_manager.load_capture(path)

    assert capture.source_file == "label_01"
    assert len(capture.barcodes) == 1
    assert capture.ocr_lines == [{"text": "PO: 82427365A"}]
    assert capture.image_uri == "file:///label_01.jpg"


def test_load_capture_null_lists(tmp_path, file_manager):
    path = write_json(tmp_path / "empty.json", {"rawBarcodes": None, "ocrLines": None})
    capture = file_manager.load_capture(path)

    assert capture.barcodes == []
    assert capture.ocr_lines == []


@pytest.mark.parametrize("data", [
    [1, 2, 3],
    {"rawBarcodes": "not a list"},
])
def test_load_capture_bad_format(tmp_path, file_manager, data):
    path = write_json(tmp_path / "bad.json", data)
    with pytest.raises(LabelDataFormatError):
        file_manager.load_capture(path)


def test_save_parsed_result_name(tmp_path, file_manager):
    path = file_manager.save_parsed_result({"carrier": "UPS"}, "label_01", tmp_path)
    assert path == tmp_path / "label_01_parsed.json"


def test_get_capture_files_skips_results(tmp_path, file_manager):
    write_json(tmp_path / "b.json", {})
    write_json(tmp_path / "sub" / "a.json", {})
    write_json(tmp_path / "b_parsed.json", {})
    (tmp_path / "notes.txt").write_text("x", encoding="utf-8")

    files = file_manager.get_capture_files(tmp_path)

    assert files == sorted([tmp_path / "b.json", tmp_path / "sub" / "a.json"])


def test_get_capture_files_missing_dir(tmp_path, file_manager):
    assert file_manager.get_capture_files(tmp_path / "absent") == []
