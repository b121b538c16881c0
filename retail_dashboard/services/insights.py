# retail_dashboard/services/insights.py
from __future__ import annotations

"""
Business insights from a text-generation model.

Public API
----------
- Insights                       three short strings shown on the dashboard
- InsightsProvider               capability interface: generate(products, sales) -> Insights
- NullInsights                   no-op provider (empty strings)
- GeminiInsights                 Google Gemini provider (google-genai)
- make_provider(config)          picks the provider from AppConfig
- build_prompt / parse_insights  prompt construction and response parsing

Providers never raise: any failure yields FALLBACK_INSIGHTS. The prompt only
carries a stock summary and the most recent sales, never the full history.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol

from ..constants import (
    GEMINI_MODEL,
    INSIGHTS_PROVIDER_GEMINI,
    INSIGHTS_RECENT_SALES,
)
from ..database.repositories.products_repo import Product
from ..database.repositories.sales_repo import Sale

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Insights:
    stock_alert: str = ""
    sales_insight: str = ""
    action_tip: str = ""


FALLBACK_INSIGHTS = Insights(
    stock_alert="Stock analysis is not available right now.",
    sales_insight="Sales data is temporarily unavailable for analysis.",
    action_tip="Keep recording your sales to get insights later.",
)


class InsightsProvider(Protocol):
    def generate(self, products: List[Product], sales: List[Sale]) -> Insights: ...


class NullInsights:
    """Provider used when insights are disabled."""

    def generate(self, products: List[Product], sales: List[Sale]) -> Insights:
        return Insights()


# ---------------------------- Prompt & parsing ----------------------------

def build_prompt(
    products: Iterable[Product],
    sales: Iterable[Sale],
    recent: int = INSIGHTS_RECENT_SALES,
) -> str:
    stock_summary = "\n".join(
        f"{p.name}: Stock {p.current_stock} (Min {p.min_stock}), Cost {p.cost_price:.2f}"
        for p in products
    )
    sales = list(sales)
    last_sales = sales[-recent:] if recent > 0 else []
    recent_summary = "\n".join(
        f"Sold {s.quantity}x {s.product_name} to {s.customer_name} "
        f"for {s.sale_price:.2f} (Profit: {s.profit:.2f})"
        for s in last_sales
    )
    return (
        "Act as an experienced business consultant analysing the data of my shop.\n\n"
        f"CURRENT STOCK:\n{stock_summary or '(no products)'}\n\n"
        f"RECENT SALES:\n{recent_summary or '(no sales)'}\n\n"
        "Based on this, give 3 short, direct strategic insights (at most 2 sentences each) about:\n"
        "1. Stock situation (what to restock urgently).\n"
        "2. Recent sales performance.\n"
        "3. One action to increase profit.\n\n"
        "Answer with strict JSON using exactly this structure:\n"
        '{"stockAlert": "string", "salesInsight": "string", "actionTip": "string"}\n'
        "Do not use markdown code blocks, only raw JSON."
    )


_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


def parse_insights(text: str) -> Insights:
    """
    Parse the model's JSON answer. Markdown fences are stripped if present.
    Raises ValueError when the payload is not the expected object.
    """
    cleaned = _FENCE.sub("", text or "").strip()
    data = json.loads(cleaned)
    if not isinstance(data, dict):
        raise ValueError("Insights response is not a JSON object.")
    try:
        return Insights(
            stock_alert=str(data["stockAlert"]),
            sales_insight=str(data["salesInsight"]),
            action_tip=str(data["actionTip"]),
        )
    except KeyError as exc:
        raise ValueError(f"Insights response is missing {exc.args[0]!r}.") from exc


# ---------------------------- Gemini ----------------------------

class GeminiInsights:
    """
    Insights from Google Gemini via the google-genai SDK.

    `client` may be injected (anything exposing models.generate_content); by
    default a genai.Client is created lazily on first use.
    """

    def __init__(self, api_key: str, model: str = GEMINI_MODEL, client=None):
        self.api_key = api_key
        self.model = model
        self._client = client

    def _get_client(self):
        if self._client is None:
            from google import genai

            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def generate(self, products: List[Product], sales: List[Sale]) -> Insights:
        try:
            prompt = build_prompt(products, sales)
            response = self._get_client().models.generate_content(
                model=self.model,
                contents=prompt,
            )
            return parse_insights(response.text)
        except Exception:
            _log.warning("Insights generation failed", exc_info=True)
            return FALLBACK_INSIGHTS


def make_provider(config) -> InsightsProvider:
    """GeminiInsights when configured with an API key, NullInsights otherwise."""
    name = (getattr(config, "insights_provider", "") or "").lower()
    key: Optional[str] = getattr(config, "gemini_api_key", None)
    if name == INSIGHTS_PROVIDER_GEMINI:
        if key:
            return GeminiInsights(key, getattr(config, "gemini_model", GEMINI_MODEL))
        _log.warning("Gemini insights requested but no API key is set; insights disabled")
    return NullInsights()
