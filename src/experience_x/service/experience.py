import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from experience_x.compose.fallback import FallbackComposer
from experience_x.compose.formatter import ResponseFormatter
from experience_x.config import Settings, get_settings
from experience_x.errors import (
    ConfigurationError,
    UpstreamError,
    UpstreamQuotaError,
    UpstreamTransportOrFormatError,
)
from experience_x.providers.llm.deepseek import DeepSeekClient
from experience_x.themes.selector import ThemeSelector

logger = logging.getLogger(__name__)

FALLBACK_MODEL = "experience-x-fallback"
ENHANCED_MODEL = "experience-x-enhanced"
UNAVAILABLE_MODEL = "experience-x-unavailable"

QUOTA_NOTE = "DeepSeek API balance issue - using enhanced creative mode"
RECOVERY_NOTE = "Using enhanced creative response engine"
UNAVAILABLE_NOTE = "Remote experience engine unavailable"

APOLOGY_TEXT = (
    "We could not reach the experience engine right now. "
    'Your query "{query}" has been kept safe; please try again in a moment.'
)


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ResilienceState(str, Enum):
    NO_KEY_CONFIGURED = "no_key_configured"
    CALLING_REMOTE = "calling_remote"
    REMOTE_SUCCEEDED = "remote_succeeded"
    REMOTE_FAILED_RECOVERABLE = "remote_failed_recoverable"
    REMOTE_FAILED_OTHER = "remote_failed_other"
    DONE = "done"


@dataclass
class ExperienceDocument:
    """Formatted narrative plus the metadata published with it."""

    response: str
    query: str
    model: str
    timestamp: str = field(default_factory=utc_timestamp)
    note: str | None = None
    error: str | None = None
    state: ResilienceState = ResilienceState.DONE

    @property
    def degraded(self) -> bool:
        return self.state is not ResilienceState.REMOTE_SUCCEEDED

    def as_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "response": self.response,
            "query": self.query,
            "timestamp": self.timestamp,
            "model": self.model,
        }
        if self.note is not None:
            payload["note"] = self.note
        if self.error is not None:
            payload["error"] = self.error
        return payload


class ExperienceOrchestrator:
    """Decides per request between the remote model and the local composer.

    Every path returns an ``ExperienceDocument``; remote failures are absorbed and
    only show up in ``model``, ``note`` and ``error``. In ``strict`` mode a
    non-quota failure yields a short apology instead of the full enhanced document.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        llm_client: DeepSeekClient | None = None,
        selector: ThemeSelector | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.llm_client = llm_client or DeepSeekClient(self.settings)
        self.selector = selector or ThemeSelector()
        self.rng = rng or random.Random()
        self.composer = FallbackComposer(self.rng)
        self.formatter = ResponseFormatter(self.rng)

    async def generate(self, query: str) -> ExperienceDocument:
        logger.info(
            "experience.request query=%s mode=%s credential=%s",
            self._clip(query, 80),
            self.settings.resilience_mode,
            self.settings.has_credential,
        )
        if not self.settings.has_credential:
            return self._done(self._without_credential(query))

        logger.info("experience.state=%s model=%s", ResilienceState.CALLING_REMOTE.value, self.llm_client.model)
        try:
            raw_text = await self.llm_client.complete(query)
        except ConfigurationError:
            return self._done(self._without_credential(query))
        except UpstreamQuotaError as exc:
            return self._done(self._recover_from_quota(query, exc))
        except UpstreamError as exc:
            return self._done(self._recover_from_failure(query, exc))
        except Exception as exc:
            logger.exception("experience.unexpected_failure model=%s", self.llm_client.model)
            wrapped = UpstreamTransportOrFormatError(f"{exc.__class__.__name__}: {exc}")
            return self._done(self._recover_from_failure(query, wrapped))

        return self._done(
            ExperienceDocument(
                response=self.formatter.format(raw_text),
                query=query,
                model=self.llm_client.model,
                state=ResilienceState.REMOTE_SUCCEEDED,
            )
        )

    def compose_fallback(self, query: str, tier: str = "enhanced") -> str:
        theme = self.selector.select(query)
        return self.composer.compose(query, theme, tier="simple" if tier == "simple" else "enhanced")

    def _without_credential(self, query: str) -> ExperienceDocument:
        logger.info("experience.no_key tier=%s", self.settings.no_key_tier)
        return ExperienceDocument(
            response=self.compose_fallback(query, tier=self.settings.no_key_tier),
            query=query,
            model=FALLBACK_MODEL,
            state=ResilienceState.NO_KEY_CONFIGURED,
        )

    def _recover_from_quota(self, query: str, exc: UpstreamQuotaError) -> ExperienceDocument:
        logger.warning(
            "experience.degraded state=%s status_code=%s detail=%s",
            ResilienceState.REMOTE_FAILED_RECOVERABLE.value,
            exc.status_code,
            exc.message,
        )
        return ExperienceDocument(
            response=self.compose_fallback(query, tier="enhanced"),
            query=query,
            model=ENHANCED_MODEL,
            note=QUOTA_NOTE,
            state=ResilienceState.REMOTE_FAILED_RECOVERABLE,
        )

    def _recover_from_failure(self, query: str, exc: UpstreamError) -> ExperienceDocument:
        logger.warning(
            "experience.degraded state=%s type=%s status_code=%s detail=%s",
            ResilienceState.REMOTE_FAILED_OTHER.value,
            exc.__class__.__name__,
            exc.status_code,
            exc.message,
        )
        if self.settings.resilience_mode == "strict":
            return ExperienceDocument(
                response=APOLOGY_TEXT.format(query=query),
                query=query,
                model=UNAVAILABLE_MODEL,
                note=UNAVAILABLE_NOTE,
                error=str(exc),
                state=ResilienceState.REMOTE_FAILED_OTHER,
            )
        return ExperienceDocument(
            response=self.compose_fallback(query, tier="enhanced"),
            query=query,
            model=ENHANCED_MODEL,
            note=RECOVERY_NOTE,
            error=str(exc),
            state=ResilienceState.REMOTE_FAILED_OTHER,
        )

    def _done(self, document: ExperienceDocument) -> ExperienceDocument:
        logger.info(
            "experience.done state=%s model=%s degraded=%s chars=%d",
            document.state.value,
            document.model,
            document.degraded,
            len(document.response),
        )
        return document

    @staticmethod
    def _clip(text: str, limit: int) -> str:
        normalized = " ".join(text.split()).strip()
        if len(normalized) <= limit:
            return normalized
        return f"{normalized[:limit]}...(truncated)"
