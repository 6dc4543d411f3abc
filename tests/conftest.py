from pathlib import Path

import pytest


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch) -> Path:
    """Пустая рабочая директория: occ.yaml из окружения разработчика не подхватится."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("OCC_DEBUG", raising=False)
    return tmp_path
