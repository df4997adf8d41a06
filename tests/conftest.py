from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from onix_ingestor.record import OnixNode

FIXTURES = Path(__file__).parent / "fixtures"

MESSAGE_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<ONIXMessage release="{release}">
  <Header><Sender><SenderName>Test</SenderName></Sender></Header>
  {products}
</ONIXMessage>
"""

ENV_VARS = (
    "ONIX_INPUT_DIR",
    "ONIX_OUTPUT_DIR",
    "ONIX_DATA_SOURCE",
    "ONIX_FILE_PATTERN",
    "ONIX_RECURSIVE",
    "ONIX_FAIL_ON_INVALID_FILE",
    "ONIX_FULL_FILE",
    "ONIX_UPDATE_FILE",
    "ONIX_DELETE_FILE",
    "ONIX_DUPLICATE_IDENTIFIERS",
    "ONIX_EMIT_MISSING_IDENTIFIERS",
    "LOG_LEVEL",
)


def load_product(name: str) -> OnixNode:
    message = OnixNode.from_xml((FIXTURES / name).read_bytes())
    product = message.child("Product")
    assert product is not None
    return product


def product_xml(body: str, reference: str = "ref.1", notification: str = "03") -> str:
    return (
        "<Product>"
        f"<RecordReference>{reference}</RecordReference>"
        f"<NotificationType>{notification}</NotificationType>"
        f"{body}"
        "</Product>"
    )


def message_xml(*products: str, release: str = "3.0") -> str:
    return MESSAGE_TEMPLATE.format(release=release, products="\n".join(products))


@pytest.fixture
def fixture_dir() -> Path:
    return FIXTURES


@pytest.fixture
def input_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "input"
    directory.mkdir()
    return directory


@pytest.fixture
def copy_fixture(input_dir: Path):
    def _copy(name: str, target: str | None = None) -> Path:
        destination = input_dir / (target or name)
        shutil.copy(FIXTURES / name, destination)
        return destination

    return _copy


@pytest.fixture
def clean_env(monkeypatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
