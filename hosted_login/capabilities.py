"""Host capabilities the navigation policy engine depends on"""

import asyncio
import logging
import webbrowser
from abc import ABC, abstractmethod

from .models import NavigationCommand

logger = logging.getLogger(__name__)


class BrowsingSurface(ABC):
    """Embedded browsing surface controlled by the engine"""

    @abstractmethod
    def execute(self, command: NavigationCommand) -> None:
        """Apply a follow-up command (LoadURL, OpenExternally, ShowErrorPage)"""

    @abstractmethod
    async def read_document_text(self) -> str:
        """Return the text content of the currently loaded document"""


class ExternalOpener(ABC):
    """Opens URLs outside the browsing surface"""

    @abstractmethod
    async def open(self, url: str) -> bool:
        """Open a URL in the system browser

        Returns:
            True if the URL was handed off successfully
        """


class SystemBrowserOpener(ExternalOpener):
    """Opens URLs with the platform default browser"""

    async def open(self, url: str) -> bool:
        loop = asyncio.get_running_loop()
        # webbrowser.open blocks while the browser process starts
        opened = await loop.run_in_executor(None, webbrowser.open, url)
        logger.debug(f"webbrowser.open returned {opened} for {url}")
        return bool(opened)


class CodeExchanger(ABC):
    """Exchanges an authorization code for a session"""

    @abstractmethod
    async def exchange(self, code: str) -> bool:
        """
        Returns:
            True if the exchange succeeded
        """


class AuthorizeUrlSource(ABC):
    """Produces a fresh authorize URL to restart the flow"""

    @abstractmethod
    def generate(self) -> str:
        """Return a new authorize URL"""
