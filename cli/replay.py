"""Replays recorded navigation traces through the policy engine"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from hosted_login import (
    BrowsingSurface,
    CodeExchanger,
    ExternalOpener,
    FlowConfig,
    HostedLoginTokenExchanger,
    NavigationCommand,
    NavigationError,
    NavigationPolicyEngine,
    PKCEManager,
    AuthorizeUrlGenerator,
)

logger = logging.getLogger(__name__)

EVENT_TYPES = ("decide", "start", "response", "finish", "fail")


class TraceError(ValueError):
    """Raised for a trace file that cannot be replayed"""


class RecordingSurface(BrowsingSurface):
    """Browsing surface that records commands and serves a canned document body"""

    def __init__(self):
        self.commands: List[NavigationCommand] = []
        self.document_text = ""

    def execute(self, command: NavigationCommand) -> None:
        self.commands.append(command)

    async def read_document_text(self) -> str:
        return self.document_text


class StubOpener(ExternalOpener):
    """External opener with a fixed outcome"""

    def __init__(self, opened: bool = True):
        self.opened = opened
        self.urls: List[str] = []

    async def open(self, url: str) -> bool:
        self.urls.append(url)
        return self.opened


class StubExchanger(CodeExchanger):
    """Code exchanger with a fixed outcome"""

    def __init__(self, success: bool = True):
        self.success = success
        self.codes: List[str] = []

    async def exchange(self, code: str) -> bool:
        self.codes.append(code)
        return self.success


@dataclass
class ReplayStep:
    """One replayed event and the commands it produced"""
    index: int
    event: str
    url: str
    decision: Optional[str]
    commands: List[NavigationCommand] = field(default_factory=list)


def load_trace(path: str) -> List[Dict[str, Any]]:
    """Load and validate a JSON trace file

    The file holds a list of events, each an object with an ``event`` key of
    decide, start, response, finish or fail.
    """
    try:
        events = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise TraceError(f"Failed to read trace {path}: {e}") from e

    if not isinstance(events, list):
        raise TraceError(f"Trace {path} must contain a list of events")

    for index, event in enumerate(events):
        if not isinstance(event, dict) or event.get("event") not in EVENT_TYPES:
            raise TraceError(f"Invalid event at index {index}: {event!r}")
    return events


def build_engine(
    config: FlowConfig,
    exchange: str = "success",
    open_external: bool = True,
    timeout: float = 60.0,
) -> Tuple[NavigationPolicyEngine, RecordingSurface]:
    """Create an engine wired to a recording surface

    Args:
        config: Flow configuration
        exchange: success, failure, or live for the httpx exchanger
        open_external: Outcome of system browser hand-offs
        timeout: Live exchange timeout in seconds
    """
    surface = RecordingSurface()
    pkce = PKCEManager()
    authorize_urls = AuthorizeUrlGenerator(config, pkce)
    if exchange == "live":
        exchanger: CodeExchanger = HostedLoginTokenExchanger(config, pkce, timeout=timeout)
    else:
        exchanger = StubExchanger(success=exchange == "success")

    engine = NavigationPolicyEngine(
        config=config,
        surface=surface,
        opener=StubOpener(opened=open_external),
        authorize_urls=authorize_urls,
        exchanger=exchanger,
    )
    if exchange == "live":
        # The live exchange needs the verifier of a real authorize request
        engine.begin()
    return engine, surface


async def replay_trace(
    engine: NavigationPolicyEngine,
    surface: RecordingSurface,
    events: List[Dict[str, Any]],
) -> List[ReplayStep]:
    """Feed events to the engine one at a time, draining async work after each

    Returns:
        One step per event with the decision and the commands it caused
    """
    steps: List[ReplayStep] = []

    for index, event in enumerate(events):
        kind = event["event"]
        url = event.get("url", "")
        decision = None
        issued_before = len(surface.commands)
        logger.debug(f"[{index}] {kind} {url}")

        if kind == "decide":
            decision = type(engine.decide(url)).__name__
        elif kind == "start":
            engine.start(url)
        elif kind == "response":
            decision = type(
                engine.response_policy(url, int(event.get("status", 200)), event.get("mime_type"))
            ).__name__
        elif kind == "finish":
            surface.document_text = event.get("body", "")
            engine.finish(url)
        elif kind == "fail":
            engine.fail(NavigationError(
                code=int(event.get("code", -1)),
                message=event.get("message", ""),
                failing_url=event.get("failing_url") or url or None,
            ))

        await engine.stream.drain()
        steps.append(ReplayStep(
            index=index,
            event=kind,
            url=url,
            decision=decision,
            commands=surface.commands[issued_before:],
        ))

    return steps
