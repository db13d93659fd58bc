"""
Hands files to the platform's default application.
"""

import os
import subprocess
import sys
from pathlib import Path
from typing import List, Optional, Union
import logging

from ..errors import OpenError


logger = logging.getLogger(__name__)


def opener_command(path: str, platform: Optional[str] = None) -> List[str]:
    """Command line that opens ``path`` on a non-Windows platform."""
    if (platform or sys.platform) == 'darwin':
        return ['open', path]
    return ['xdg-open', path]


def open_with_default_app(path: Union[str, Path]) -> None:
    """
    Open a file with the platform default handler and wait for the launcher.

    Args:
        path: File to open

    Raises:
        OpenError: If no handler is available or the launcher fails
    """
    path = str(path)
    logger.info(f"Opening {path} with the default application")

    if sys.platform.startswith('win'):
        try:
            os.startfile(path)
        except OSError as e:
            raise OpenError(f"Failed to open file: {e}") from e
        return

    command = opener_command(path)
    try:
        subprocess.run(command, check=True)
    except FileNotFoundError as e:
        raise OpenError(f"No default application launcher found ({command[0]})") from e
    except (OSError, subprocess.CalledProcessError) as e:
        raise OpenError(f"Failed to open file: {e}") from e
