"""
Tests for the image build/push helper.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bluegreen.modules.cluster import CommandError, CommandRunner
from bluegreen.modules.pipeline import ImageBuilder
from conftest import CommandResponse

REPOSITORY = "ghcr.io/example/bluegreen-demo"


@pytest.fixture
def builder():
    return ImageBuilder(CommandRunner(binary="docker"), REPOSITORY, context="demo")


@pytest.mark.command_mock
class TestImageBuilder:

    def test_image_ref(self, builder):
        assert builder.image_ref("blue") == f"{REPOSITORY}:blue"

    def test_build(self, builder, command_mocker):
        builder.build("app_green.py", "green")

        assert command_mocker.calls[0].command == [
            "docker",
            "build",
            "--build-arg",
            "APP_FILE=app_green.py",
            "-t",
            f"{REPOSITORY}:green",
            "demo",
        ]

    def test_build_and_push_order(self, builder, command_mocker):
        results = builder.build_and_push()

        assert len(results) == 4
        assert [c.full_command_str for c in command_mocker.calls] == [
            f"docker build --build-arg APP_FILE=app_blue.py -t {REPOSITORY}:blue demo",
            f"docker build --build-arg APP_FILE=app_green.py -t {REPOSITORY}:green demo",
            f"docker push {REPOSITORY}:blue",
            f"docker push {REPOSITORY}:green",
        ]

    def test_build_without_push(self, builder, command_mocker):
        builder.build_and_push(push=False)

        assert not command_mocker.was_called_with("push")

    def test_single_tag(self, builder, command_mocker):
        builder.build_and_push(tags=["green"])

        assert command_mocker.call_count == 2
        assert not command_mocker.was_called_with(":blue")

    def test_stops_at_first_failure(self, builder, command_mocker):
        command_mocker.register(
            "APP_FILE=app_blue.py",
            CommandResponse(stderr="failed to solve", returncode=1),
        )

        with pytest.raises(CommandError, match="failed to solve"):
            builder.build_and_push()

        assert command_mocker.call_count == 1
