# tests/test_insights.py
import json
import threading
from types import SimpleNamespace

import pytest

from retail_dashboard.config import AppConfig, load_config
from retail_dashboard.services.insights import (
    FALLBACK_INSIGHTS, GeminiInsights, Insights, NullInsights, build_prompt,
    make_provider, parse_insights,
)

ANSWER = {"stockAlert": "Restock cables.", "salesInsight": "Headphones lead.", "actionTip": "Bundle items."}


class FakeModels:
    def __init__(self, text=None, exc=None):
        self.text, self.exc, self.calls = text, exc, []

    def generate_content(self, model, contents):
        self.calls.append((model, contents))
        if self.exc:
            raise self.exc
        return SimpleNamespace(text=self.text)


def fake_client(**kw):
    return SimpleNamespace(models=FakeModels(**kw))


def test_parse_plain_and_fenced_json():
    raw = json.dumps(ANSWER)
    expected = Insights("Restock cables.", "Headphones lead.", "Bundle items.")
    assert parse_insights(raw) == expected
    assert parse_insights(f"```json\n{raw}\n```") == expected


@pytest.mark.parametrize("text", ["", "not json", "[1, 2]", '{"stockAlert": "x"}'])
def test_parse_rejects_bad_payloads(text):
    with pytest.raises(ValueError):
        parse_insights(text)


def test_prompt_only_carries_recent_sales(store):
    many = store.sales * 8  # 16 sales
    prompt = build_prompt(store.products, many, recent=10)
    assert prompt.count("Sold ") == 10
    assert "Bluetooth Headphones: Stock 15 (Min 5)" in prompt
    assert "stockAlert" in prompt


def test_gemini_provider_success(store):
    client = fake_client(text=json.dumps(ANSWER))
    provider = GeminiInsights("key", model="m-1", client=client)
    result = provider.generate(store.products, store.sales)
    assert result.action_tip == "Bundle items."
    model, contents = client.models.calls[0]
    assert model == "m-1"
    assert "RECENT SALES" in contents


@pytest.mark.parametrize("client", [
    fake_client(exc=RuntimeError("quota exceeded")),
    fake_client(text="I cannot answer that"),
])
def test_gemini_provider_falls_back(store, client):
    provider = GeminiInsights("key", client=client)
    assert provider.generate(store.products, store.sales) == FALLBACK_INSIGHTS


def test_null_provider_is_empty(store):
    assert NullInsights().generate(store.products, store.sales) == Insights()


def test_make_provider_selection(tmp_path):
    base = AppConfig(db_path=tmp_path / "x.db")
    assert isinstance(make_provider(base), NullInsights)
    no_key = AppConfig(db_path=tmp_path / "x.db", insights_provider="gemini")
    assert isinstance(make_provider(no_key), NullInsights)
    gem = AppConfig(db_path=tmp_path / "x.db", insights_provider="gemini", gemini_api_key="k")
    assert isinstance(make_provider(gem), GeminiInsights)


def test_load_config_from_env(tmp_path):
    cfg = load_config({
        "RETAIL_DASHBOARD_DB": str(tmp_path / "shop.db"),
        "RETAIL_DASHBOARD_INSIGHTS": "Gemini",
        "API_KEY": "abc",
        "RETAIL_DASHBOARD_LOG_LEVEL": "debug",
    })
    assert cfg.db_path == tmp_path / "shop.db"
    assert cfg.insights_provider == "gemini"
    assert cfg.gemini_api_key == "abc"
    assert cfg.log_level == 10
    assert load_config({}).insights_provider == "none"


# ---------------------------- background job ----------------------------

class _GatedProvider:
    """First call blocks until released; later calls answer immediately."""

    def __init__(self):
        self.gate = threading.Event()
        self.calls = 0

    def generate(self, products, sales):
        self.calls += 1
        n = self.calls
        if n == 1:
            self.gate.wait(5)
        return Insights(stock_alert=f"answer {n}")


def test_job_publishes_result(qtbot, store):
    from retail_dashboard.modules.dashboard.insights_job import InsightsJob

    job = InsightsJob(NullInsights())
    with qtbot.waitSignal(job.insights_ready, timeout=3000) as blocker:
        job.request(store.products, store.sales)
    assert blocker.args == [Insights()]


def test_job_drops_stale_results(qtbot, store):
    from PySide6.QtCore import QThreadPool
    from retail_dashboard.modules.dashboard.insights_job import InsightsJob

    provider = _GatedProvider()
    pool = QThreadPool()
    pool.setMaxThreadCount(2)
    job = InsightsJob(provider, pool=pool)
    received = []
    job.insights_ready.connect(received.append)

    first = job.request(store.products, store.sales)
    qtbot.waitUntil(lambda: provider.calls == 1, timeout=3000)
    with qtbot.waitSignal(job.insights_ready, timeout=3000):
        second = job.request(store.products, store.sales)
    assert (first, second) == (1, 2)

    provider.gate.set()
    pool.waitForDone(3000)
    qtbot.wait(50)
    assert [r.stock_alert for r in received] == ["answer 2"]


def test_job_survives_raising_provider(qtbot, store):
    from retail_dashboard.modules.dashboard.insights_job import InsightsJob

    class Boom:
        def generate(self, products, sales):
            raise RuntimeError("boom")

    job = InsightsJob(Boom())
    with qtbot.waitSignal(job.insights_ready, timeout=3000) as blocker:
        job.request(store.products, store.sales)
    assert blocker.args == [FALLBACK_INSIGHTS]
