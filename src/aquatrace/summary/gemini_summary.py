"""
Narrative summary of the sampling campaign from the Gemini API.

Only per-period aggregates (sample count, mean EC, mean nitrate) are sent.
The service is asked for a JSON object with a management summary, a list of
anomalies and a list of recommendations, all in Persian. Any failure on the
way (no API key, network, malformed JSON, missing fields) is logged and
answered with a fixed fallback result; it never reaches the caller.
"""
from __future__ import annotations
import json
import logging
import os
import time
from dataclasses import dataclass, field
from typing import Optional

import pandas as pd
from google import genai
from google.genai import types

from ..config import EC, NO3, GEMINI_MODEL, GEMINI_API_KEY_ENV, GEMINI_RETRIES, GEMINI_RETRY_DELAY
from ..data_process.periods import period_overview

logger = logging.getLogger(__name__)

PROMPT_HEADER = """
داده‌های کیفیت آب شامل هدایت الکتریکی (EC) و سطوح نیترات را در دوره‌های زمانی مختلف تحلیل کنید.
لطفاً جابجایی‌های مهم در نقاط خاص، نوسانات شدید و روندهای کلی سلامت آب را شناسایی کنید.
تمام پاسخ‌ها باید به زبان فارسی باشد.
""".strip()

RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "summary": types.Schema(
            type=types.Type.STRING,
            description="خلاصه مدیریتی از روندها به فارسی",
        ),
        "anomalies": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(type=types.Type.STRING),
            description="لیست کد نقاط یا مناطقی که جابجایی نگران‌کننده داشته‌اند به فارسی",
        ),
        "recommendations": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(type=types.Type.STRING),
            description="توصیه‌های عملی برای مدیریت منابع آب به فارسی",
        ),
    },
    required=["summary", "anomalies", "recommendations"],
)

# markers of transient overload worth retrying
_TRANSIENT = ("503", "overloaded", "resource exhausted", "unavailable")


@dataclass(frozen=True)
class AnalysisResult:
    summary: str
    anomalies: list = field(default_factory=list)
    recommendations: list = field(default_factory=list)
    fallback: bool = False

    @classmethod
    def from_payload(cls, payload) -> "AnalysisResult":
        """Build from the decoded JSON answer; raises ValueError on a malformed payload."""
        if not isinstance(payload, dict):
            raise ValueError(f"Expected a JSON object, got {type(payload).__name__}")
        missing = [k for k in ("summary", "anomalies", "recommendations") if k not in payload]
        if missing:
            raise ValueError(f"Summary response is missing fields {missing}")
        summary = payload["summary"]
        anomalies = payload["anomalies"]
        recommendations = payload["recommendations"]
        if not isinstance(summary, str):
            raise ValueError("'summary' must be a string")
        for name, items in (("anomalies", anomalies), ("recommendations", recommendations)):
            if not isinstance(items, list) or not all(isinstance(i, str) for i in items):
                raise ValueError(f"'{name}' must be a list of strings")
        return cls(summary=summary, anomalies=list(anomalies), recommendations=list(recommendations))


FALLBACK_RESULT = AnalysisResult(
    summary="خطا در تحلیل داده‌ها. لطفاً اتصال خود را بررسی کرده و دوباره تلاش کنید.",
    anomalies=[],
    recommendations=["بررسی سنسورها و دقت داده‌های ورودی."],
    fallback=True,
)


def summary_payload(samples: pd.DataFrame) -> list[dict]:
    """Per-period aggregates sent to the service, in period order."""
    overview = period_overview(samples)
    return [
        {
            "date": str(label),
            "count": int(row["count"]),
            "averages": {"ec": float(row[EC]), "nitrate": float(row[NO3])},
        }
        for label, row in overview.iterrows()
    ]


def build_prompt(samples: pd.DataFrame) -> str:
    payload = json.dumps(summary_payload(samples), ensure_ascii=False)
    return f"{PROMPT_HEADER}\n\nData: {payload}"


def get_client(api_key: Optional[str] = None) -> genai.Client:
    """Gemini client for the given key, or the first key found in GEMINI_API_KEY / API_KEY."""
    if api_key is None:
        api_key = next((os.environ[k] for k in GEMINI_API_KEY_ENV if os.environ.get(k)), None)
    if not api_key:
        raise RuntimeError(f"No Gemini API key configured (set one of {', '.join(GEMINI_API_KEY_ENV)})")
    return genai.Client(api_key=api_key)


def call_gemini_with_retry(client, model: str, contents, config=None,
                           retries: int = GEMINI_RETRIES, delay: float = GEMINI_RETRY_DELAY):
    """
    Call generate_content, retrying with exponential backoff on 503/overload errors.

    Other errors are raised immediately.
    """
    if retries < 1:
        raise ValueError(f"retries must be at least 1, got {retries}")
    for attempt in range(retries):
        try:
            return client.models.generate_content(model=model, contents=contents, config=config)
        except Exception as e:
            message = str(e).lower()
            if attempt < retries - 1 and any(marker in message for marker in _TRANSIENT):
                wait = delay * (2 ** attempt)
                logger.warning("Gemini busy (%s), retrying in %.1fs", e, wait)
                time.sleep(wait)
                continue
            raise


def analyze_water_data(samples: pd.DataFrame,
                       client=None,
                       model: str = GEMINI_MODEL) -> Optional[AnalysisResult]:
    """
    Ask Gemini for a narrative summary of the periods in a samples table.

    Parameters:
    - samples: samples table (clustered or not)
    - client: object exposing ``models.generate_content``; built from the
      environment when None
    - model: Gemini model name

    Returns:
    - AnalysisResult, FALLBACK_RESULT if anything goes wrong, or None when
      there is nothing to summarise
    """
    if samples.empty:
        return None

    prompt = build_prompt(samples)
    config = types.GenerateContentConfig(
        response_mime_type="application/json",
        response_schema=RESPONSE_SCHEMA,
    )
    try:
        if client is None:
            client = get_client()
        response = call_gemini_with_retry(client, model, prompt, config=config)
        result = AnalysisResult.from_payload(json.loads(response.text or "{}"))
    except Exception:
        logger.exception("Gemini analysis failed, using fallback summary")
        return FALLBACK_RESULT

    logger.info("Gemini summary received: %d anomalies, %d recommendations",
                len(result.anomalies), len(result.recommendations))
    return result
