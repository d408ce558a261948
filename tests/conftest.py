"""
Shared pytest fixtures for Bluegreen tests.

This module provides common fixtures including:
- CommandMocker: Mock kubectl/docker subprocess calls with canned responses
- Clean configuration environment
"""

import os
import sys
from dataclasses import dataclass
from typing import List, Optional, Pattern, Union
from unittest.mock import MagicMock, patch

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bluegreen.modules.config import reset_config


# =============================================================================
# Command Mocking Infrastructure
# =============================================================================

@dataclass
class CommandResponse:
    """Represents a mocked CLI command response."""
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0

    def to_completed_process(self) -> MagicMock:
        """Convert to a subprocess.CompletedProcess-like mock."""
        result = MagicMock()
        result.stdout = self.stdout
        result.stderr = self.stderr
        result.returncode = self.returncode
        return result


@dataclass
class CommandCall:
    """Record of a CLI call made during testing."""
    command: List[str]
    full_command_str: str
    matched_pattern: Optional[str] = None
    response: Optional[CommandResponse] = None
    background: bool = False


class CommandMocker:
    """
    Mock kubectl/docker subprocess calls with pattern-matched responses.

    Patterns are matched against the arguments after the binary name, so
    the same mocker serves kubectl and docker.

    Usage:
        def test_promote(command_mocker):
            command_mocker.register("argo rollouts promote", CommandResponse(
                stdout="rollout 'bluegreen-demo' promoted"
            ))

            RolloutsCLI(CommandRunner()).promote("bluegreen-demo")

            assert command_mocker.was_called_with("promote bluegreen-demo")
    """

    def __init__(self):
        self._responses: List[tuple] = []
        self._call_history: List[CommandCall] = []
        self._default_response = CommandResponse()

    def register(
        self,
        pattern: Union[str, Pattern],
        response: CommandResponse,
        priority: int = 0
    ) -> "CommandMocker":
        """
        Register a response for commands matching the pattern.

        Args:
            pattern: String (substring match) or regex pattern
            response: CommandResponse to return when matched
            priority: Higher priority patterns are checked first

        Returns:
            self for chaining
        """
        self._responses.append((pattern, response, priority))
        self._responses.sort(key=lambda x: x[2], reverse=True)
        return self

    def register_scenario(self, scenario_name: str) -> "CommandMocker":
        """Register all responses for a named cluster scenario."""
        from fixtures.cluster_scenarios import SCENARIOS

        if scenario_name not in SCENARIOS:
            raise ValueError(
                f"Unknown scenario: {scenario_name}. "
                f"Available: {list(SCENARIOS.keys())}"
            )

        for pattern, response in SCENARIOS[scenario_name].items():
            self.register(pattern, response)

        return self

    def set_default_response(self, response: CommandResponse) -> "CommandMocker":
        """Set the default response for unmatched commands."""
        self._default_response = response
        return self

    def _match(self, cmd: List[str]) -> tuple:
        args = " ".join(cmd[1:])
        for pattern, resp, _ in self._responses:
            if isinstance(pattern, str):
                if pattern in args:
                    return pattern, resp
            elif pattern.search(args):
                return pattern.pattern, resp
        return None, self._default_response

    def mock_run(self, cmd: List[str], **kwargs) -> MagicMock:
        """Side effect for subprocess.run."""
        matched_pattern, response = self._match(cmd)
        self._call_history.append(
            CommandCall(
                command=list(cmd),
                full_command_str=" ".join(cmd),
                matched_pattern=matched_pattern,
                response=response,
            )
        )
        return response.to_completed_process()

    def mock_popen(self, cmd: List[str], **kwargs) -> MagicMock:
        """Side effect for subprocess.Popen; the process exits immediately."""
        self._call_history.append(
            CommandCall(command=list(cmd), full_command_str=" ".join(cmd), background=True)
        )
        process = MagicMock()
        process.args = list(cmd)
        process.wait.return_value = 0
        process.returncode = 0
        return process

    @property
    def calls(self) -> List[CommandCall]:
        """Get all calls made during the test."""
        return self._call_history

    @property
    def call_count(self) -> int:
        return len(self._call_history)

    @property
    def background_calls(self) -> List[CommandCall]:
        return [c for c in self._call_history if c.background]

    def was_called_with(self, pattern: str) -> bool:
        """Check if any call contained the given pattern."""
        return any(pattern in call.full_command_str for call in self._call_history)

    def get_calls_matching(self, pattern: str) -> List[CommandCall]:
        """Get all calls containing the given pattern."""
        return [c for c in self._call_history if pattern in c.full_command_str]

    def reset(self):
        """Clear call history (but keep registered responses)."""
        self._call_history = []


@pytest.fixture
def command_mocker():
    """
    Fixture that provides a CommandMocker with subprocess.run and Popen patched.

    Unregistered commands succeed with empty output.
    """
    mocker = CommandMocker()
    with patch("subprocess.run", side_effect=mocker.mock_run), \
            patch("subprocess.Popen", side_effect=mocker.mock_popen):
        yield mocker


@pytest.fixture
def command_mocker_strict():
    """
    Strict mocker that fails any unregistered command.

    Use this when every CLI interaction must be explicitly accounted for.
    """
    mocker = CommandMocker()
    mocker.set_default_response(CommandResponse(
        stderr="STRICT MODE: No mock registered for this command",
        returncode=127
    ))
    with patch("subprocess.run", side_effect=mocker.mock_run), \
            patch("subprocess.Popen", side_effect=mocker.mock_popen):
        yield mocker


# =============================================================================
# Configuration
# =============================================================================

CONFIG_ENV_VARS = [
    "BLUEGREEN_HOST",
    "BLUEGREEN_PORT",
    "BLUEGREEN_COLOR",
    "BLUEGREEN_OUTPUT_DIR",
    "BLUEGREEN_NAMESPACE",
    "BLUEGREEN_ROLLOUT",
    "LOG_LEVEL",
    "DEBUG",
    "KUBECTL_BIN",
    "DOCKER_BIN",
    "COMMAND_TIMEOUT",
    "IMAGE_REGISTRY",
    "IMAGE_NAME",
    "ARGOCD_INSTALL_URL",
    "ROLLOUTS_INSTALL_URL",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Strip bluegreen variables and run from an empty directory (no .env)."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("bluegreen.modules.config.load_dotenv", lambda *a, **kw: False)
    reset_config()
    yield monkeypatch
    reset_config()


# =============================================================================
# Test Markers Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "command_mock: Tests using mocked kubectl/docker subprocess calls"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests requiring a real cluster"
    )
