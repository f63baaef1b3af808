"""Open the authorization URL in the user's default browser"""

import logging
import webbrowser

from .errors import LaunchError

logger = logging.getLogger(__name__)


class BrowserLauncher:
    """Opens URLs with the operating system's default browser"""

    def open(self, url: str) -> None:
        """
        Open ``url`` in the default browser.

        Raises:
            LaunchError: If no browser could be started
        """
        try:
            opened = webbrowser.open(url)
        except webbrowser.Error as e:
            raise LaunchError(url) from e

        if not opened:
            raise LaunchError(url)
        logger.info("Browser opened successfully")
