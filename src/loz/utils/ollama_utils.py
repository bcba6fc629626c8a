import logging
import subprocess
import time

from ..errors import ProviderEnvironmentError

VERSION_MARKER = "ollama version"

logger = logging.getLogger(__name__)


def probe_ollama_version(binary: str = "ollama", timeout: float = 10.0) -> str:
    """
    Run ``<binary> --version`` and return its output.

    Args:
        binary: Name or path of the ollama executable
        timeout: Seconds to wait for the probe

    Returns:
        The probe output (stdout and stderr combined)

    Raises:
        ProviderEnvironmentError: If the binary is missing, fails, or does not
            report the expected version marker.
    """
    start_time = time.time()
    try:
        result = subprocess.run(
            [binary, "--version"],
            capture_output=True,
            text=True,
            check=False,
            timeout=timeout,
        )
    except FileNotFoundError:
        raise ProviderEnvironmentError(
            f"'{binary}' was not found. Install Ollama from https://ollama.com and make sure it is on PATH."
        ) from None
    except (OSError, subprocess.TimeoutExpired) as e:
        raise ProviderEnvironmentError(f"Could not run '{binary} --version': {e}") from e

    output = f"{result.stdout}\n{result.stderr}".strip()
    logger.debug(f"Ollama version probe took {(time.time() - start_time) * 1000:.2f} ms: {output!r}")
    if VERSION_MARKER not in output:
        raise ProviderEnvironmentError(
            f"Unexpected output from '{binary} --version' (is the Ollama daemon installed?): {output or '<empty>'}"
        )
    return output
