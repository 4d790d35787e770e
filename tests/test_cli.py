import pytest

import finsight.config as cfg
from finsight import __version__
from finsight.cli import main


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("FINSIGHT_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("FINSIGHT_ASSETS_DIR", raising=False)
    monkeypatch.delenv("FINSIGHT_TRANSACTIONS_FILE", raising=False)
    cfg.load_settings.cache_clear()
    yield tmp_path / "data"
    cfg.load_settings.cache_clear()


def test_version(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == __version__


def test_health(data_dir, capsys):
    assert main(["health"]) == 0
    assert capsys.readouterr().out.strip() == "ok"


def test_add_list_delete(data_dir, capsys):
    assert main(["add", "--id", "cli-1", "--date", "2024-03-01", "--description", "Tea", "--amount", "3.5"]) == 0
    assert "id = cli-1" in capsys.readouterr().out

    assert main(["transactions"]) == 0
    out = capsys.readouterr().out
    assert "id= cli-1" in out

    assert main(["delete", "--id", "cli-1"]) == 0
    assert "removed = 1" in capsys.readouterr().out

    main(["transactions"])
    assert "cli-1" not in capsys.readouterr().out


def test_add_requires_amount(data_dir):
    with pytest.raises(SystemExit):
        main(["add", "--description", "Tea"])


def test_cards(data_dir, capsys):
    assert main(["cards"]) == 0
    out = capsys.readouterr().out
    assert "card: primary" in out
    assert "card: secondary" in out


def test_spending_and_balances(data_dir, capsys):
    assert main(["spending"]) == 0
    assert "month: 2024-01 total=1620.00" in capsys.readouterr().out

    assert main(["balances"]) == 0
    assert "balances_count = 3" in capsys.readouterr().out
