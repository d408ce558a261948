import logging
import subprocess
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

logger = logging.getLogger("bluegreen.cluster")


@dataclass
class CommandResult:
    """Outcome of one external command."""

    args: List[str]
    return_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.return_code == 0

    @property
    def output(self) -> str:
        """Combined stdout and stderr."""
        output = self.stdout
        if self.stderr:
            output += "\n" + self.stderr
        return output


class CommandError(RuntimeError):
    """An external command failed, timed out, or could not be started."""

    def __init__(self, message: str, result: Optional[CommandResult] = None):
        super().__init__(message)
        self.result = result


@dataclass
class CommandRunner:
    """
    Run an external CLI (kubectl, docker) as a subprocess.

    Every invocation is prefixed with binary. With check enabled, the first
    non-zero exit raises CommandError, like a shell script under `set -e`.
    """

    binary: str = "kubectl"
    timeout: Optional[int] = 120
    history: List[CommandResult] = field(default_factory=list, repr=False)

    def command(self, args: Sequence[str]) -> List[str]:
        return [self.binary] + list(args)

    def run(
        self,
        args: Sequence[str],
        check: bool = True,
        timeout: Optional[int] = None,
    ) -> CommandResult:
        """
        Execute binary with args and capture its output.

        Args:
            args: Arguments after the binary
            check: Raise CommandError on a non-zero exit
            timeout: Override the runner timeout (seconds)

        Returns:
            CommandResult with captured output

        Raises:
            CommandError: On non-zero exit (when check), timeout, or missing binary
        """
        cmd = self.command(args)
        cmd_str = " ".join(cmd)
        logger.debug(f"Running: {cmd_str}")

        try:
            process = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=timeout if timeout is not None else self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.error(f"Command timed out: {cmd_str}")
            raise CommandError(f"Command timed out: {cmd_str}") from None
        except FileNotFoundError:
            logger.error(f"Executable not found: {self.binary}")
            raise CommandError(f"Executable not found: {self.binary}") from None

        result = CommandResult(
            args=cmd,
            return_code=process.returncode,
            stdout=process.stdout or "",
            stderr=process.stderr or "",
        )
        self.history.append(result)

        if check and not result.success:
            logger.error(f"Command failed ({result.return_code}): {cmd_str}")
            raise CommandError(
                f"Command failed with exit code {result.return_code}: {cmd_str}\n"
                f"{result.stderr.strip()}",
                result,
            )

        return result

    def start(self, args: Sequence[str]) -> subprocess.Popen:
        """
        Start binary with args in the background.

        Used for long-running commands such as port-forward and dashboard.
        The caller owns the returned process.
        """
        cmd = self.command(args)
        logger.info(f"Starting background command: {' '.join(cmd)}")
        try:
            return subprocess.Popen(cmd)
        except FileNotFoundError:
            raise CommandError(f"Executable not found: {self.binary}") from None
