"""
Session with a running KiCad instance, used by the --board output.
"""
import logging
from dataclasses import dataclass
from typing import Optional

try:
    from kipy import KiCad
    from kipy.board import Board
    KICAD_AVAILABLE = True
except ImportError:
    KICAD_AVAILABLE = False
    # Provide type hints even if kicad-python not installed
    KiCad = None  # type: ignore
    Board = None  # type: ignore

log = logging.getLogger(__name__)

CLIENT_NAME = "subminitube"
DEFAULT_TIMEOUT_MS = 2000


@dataclass
class BoardSession:
    """Live KiCad handle plus the board tube graphics are placed on"""
    kicad: 'KiCad'
    board: 'Board'
    version: Optional[str] = None


def _kicad_version(kicad: 'KiCad') -> Optional[str]:
    # Best effort, a missing version does not block drawing
    try:
        version = str(kicad.get_version())
        if not kicad.check_version():
            log.warning("KiCad %s may not match the installed kicad-python", version)
        return version
    except Exception as e:
        log.warning("Could not check KiCad version: %s", e)
        return None


def connect_to_kicad(timeout_ms: int = DEFAULT_TIMEOUT_MS) -> BoardSession:
    """
    Open an IPC session with KiCad and fetch the open PCB.

    Args:
        timeout_ms: IPC request timeout

    Returns:
        BoardSession for the open board

    Raises:
        ImportError: If kicad-python is not installed
        ConnectionError: If KiCad is not reachable
        RuntimeError: If no board is open
    """
    if not KICAD_AVAILABLE:
        raise ImportError(
            "kicad-python is not installed. "
            "Install it with: pip install 'subminitube[kicad]'"
        )

    try:
        kicad = KiCad(client_name=CLIENT_NAME, timeout_ms=timeout_ms)
    except Exception as e:
        raise ConnectionError(
            f"Cannot reach KiCad to place the tube.\n"
            f"(Preferences > Plugins > Enable API server)\n"
            f"Error: {e}"
        ) from e

    version = _kicad_version(kicad)
    log.info("Connected to KiCad %s", version or "(unknown version)")

    try:
        board = kicad.get_board()
    except Exception as e:
        raise RuntimeError(f"No PCB open in KiCad to draw the tube on: {e}") from e

    return BoardSession(kicad=kicad, board=board, version=version)


def check_kicad_available() -> bool:
    """True if kicad-python can be imported"""
    return KICAD_AVAILABLE
