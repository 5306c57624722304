import json
import logging
import time
from typing import Any

import httpx
from sqlalchemy.orm import Session

from careerpath.core.config import settings
from careerpath.models.entities import AiAuditLog
from careerpath.schemas.report import REPORT_SECTIONS
from careerpath.services.report_structure import structure_report
from careerpath.services.sample_report import generate_sample_report

logger = logging.getLogger(__name__)

SUPPORTED_LLM_PROVIDERS = {"groq", "openai"}
MAX_AUDIT_OUTPUT_CHARS = 20000

CAREER_ANALYSIS_SYSTEM_PROMPT = (
    "You are an expert career advisor who maps professional backgrounds onto the "
    "SFIA 9 and DigComp 2.2 skill frameworks. Respond with a single JSON object "
    "containing exactly these sections: "
    + ", ".join(REPORT_SECTIONS)
    + ". Proficiency and skill levels use a 1-5 scale. Fit scores are out of 10. "
    "Salaries are strings such as \"$90,000 - $120,000\". Do not add commentary "
    "outside the JSON object."
)


def _normalize_provider() -> str:
    provider = (settings.llm_provider or "").strip().lower()
    if provider not in SUPPORTED_LLM_PROVIDERS:
        return "openai"
    return provider


def _provider_config() -> tuple[str, str | None, str, str]:
    provider = _normalize_provider()
    if provider == "groq":
        return (
            provider,
            settings.groq_api_key,
            settings.groq_model,
            settings.groq_api_base.rstrip("/"),
        )
    return (
        "openai",
        settings.openai_api_key,
        settings.openai_model,
        settings.openai_api_base.rstrip("/"),
    )


def ai_is_configured() -> bool:
    _, api_key, model, _ = _provider_config()
    return bool(settings.ai_enabled and api_key and model)


def get_active_ai_provider() -> str:
    return _provider_config()[0]


def get_active_ai_model() -> str:
    return _provider_config()[2]


def _call_llm(
    system_prompt: str,
    user_payload: str,
    *,
    override_model: str | None = None,
    expect_json: bool = True,
    temperature: float = 0.5,
) -> str:
    provider, api_key, default_model, api_base = _provider_config()
    model = (override_model or default_model or "").strip()
    if not settings.ai_enabled:
        raise RuntimeError("AI is disabled")
    if not api_key:
        raise RuntimeError(f"{provider} API key is not configured")
    if not model:
        raise RuntimeError(f"No model configured for provider '{provider}'")

    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }
    body = {
        "model": model,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_payload},
        ],
        "temperature": temperature,
    }
    if provider == "openai" and expect_json:
        body["response_format"] = {"type": "json_object"}

    last_error: Exception | None = None
    with httpx.Client(timeout=settings.llm_timeout_seconds) as client:
        for attempt in range(2):
            try:
                response = client.post(
                    f"{api_base}/chat/completions",
                    headers=headers,
                    json=body,
                )
                response.raise_for_status()
                data = response.json()
                content = data["choices"][0]["message"]["content"]
                if not content:
                    raise RuntimeError(f"Empty response from {provider}")
                if not isinstance(content, str):
                    raise TypeError("message content is not text")
                return content
            except (KeyError, IndexError, TypeError, ValueError) as exc:
                raise RuntimeError(f"Malformed response from {provider}") from exc
            except httpx.HTTPStatusError as exc:
                last_error = exc
                status = exc.response.status_code
                if status in {429, 500, 502, 503, 504} and attempt == 0:
                    time.sleep(1.5)
                    continue
                raise RuntimeError(
                    f"LLM API error ({status}): {exc.response.text[:500]}"
                ) from exc
            except httpx.TransportError as exc:
                last_error = exc
                if attempt == 0:
                    time.sleep(1.0)
                    continue
                break

    raise RuntimeError(f"LLM call failed: {last_error}") from last_error


def _safe_json(text: str) -> dict[str, Any] | None:
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        try:
            start = text.index("{")
            end = text.rindex("}") + 1
            parsed = json.loads(text[start:end])
        except (ValueError, json.JSONDecodeError):
            return None
    return parsed if isinstance(parsed, dict) else None


def _log_ai_audit(
    db: Session | None,
    *,
    user_id: str | None,
    feature: str,
    prompt_input: dict | None,
    model: str | None,
    output: str | None,
) -> None:
    if db is None:
        return
    entry = AiAuditLog(
        user_id=user_id,
        feature=feature,
        prompt_input=prompt_input,
        model=model,
        output=(output or "")[:MAX_AUDIT_OUTPUT_CHARS],
    )
    try:
        db.add(entry)
        db.commit()
    except Exception:
        # Audit logging must never break user-facing responses.
        db.rollback()
        logger.exception("Failed to write AI audit log for feature %s", feature)


def call_json_llm(
    system_prompt: str,
    payload: dict[str, Any],
    *,
    db: Session | None = None,
    user_id: str | None = None,
    feature: str,
    temperature: float = 0.5,
) -> dict[str, Any]:
    raw = _call_llm(system_prompt, json.dumps(payload), temperature=temperature)
    _log_ai_audit(
        db,
        user_id=user_id,
        feature=feature,
        prompt_input=payload,
        model=get_active_ai_model(),
        output=raw,
    )
    parsed = _safe_json(raw)
    if parsed is None:
        raise RuntimeError(f"{get_active_ai_provider()} returned a response that is not a JSON object")
    return parsed


def generate_career_analysis(
    request_data: dict[str, str],
    *,
    db: Session | None = None,
    user_id: str | None = None,
) -> tuple[dict[str, Any], str]:
    """Produce a structured report for the submitted background.

    Returns ``(report, source)`` where source is ``"ai"`` or ``"sample"``.
    Without a configured provider the static sample report is used, unless
    ``ai_fallback_to_sample`` is off, in which case ``RuntimeError`` is raised.
    """
    if not ai_is_configured():
        if not settings.ai_fallback_to_sample:
            raise RuntimeError("AI provider is not configured")
        logger.info("AI not configured; returning sample report for %s", request_data.get("desiredRole"))
        return structure_report(generate_sample_report(request_data)), "sample"

    raw = call_json_llm(
        CAREER_ANALYSIS_SYSTEM_PROMPT,
        {"task": "career_analysis", "profile": request_data},
        db=db,
        user_id=user_id,
        feature="career_analysis",
        temperature=0.4,
    )
    return structure_report(raw), "ai"
