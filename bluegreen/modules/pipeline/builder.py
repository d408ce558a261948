import logging
from typing import List, Optional

from bluegreen.modules.cluster.runner import CommandResult, CommandRunner

logger = logging.getLogger("bluegreen.pipeline")

# (app file, image tag) pairs, built in this order
VARIANTS = [
    ("app_blue.py", "blue"),
    ("app_green.py", "green"),
]


class ImageBuilder:
    """
    Build and push the demo images with the docker CLI.

    Performs the same steps as the generated CI workflow, for local use.
    """

    def __init__(self, runner: CommandRunner, repository: str, context: str = "."):
        self.runner = runner
        self.repository = repository
        self.context = context

    def image_ref(self, tag: str) -> str:
        return f"{self.repository}:{tag}"

    def build(self, app_file: str, tag: str) -> CommandResult:
        """Build one image variant from the generated Dockerfile."""
        logger.info(f"Building {self.image_ref(tag)} from {app_file}")
        return self.runner.run(
            [
                "build",
                "--build-arg",
                f"APP_FILE={app_file}",
                "-t",
                self.image_ref(tag),
                self.context,
            ]
        )

    def push(self, tag: str) -> CommandResult:
        logger.info(f"Pushing {self.image_ref(tag)}")
        return self.runner.run(["push", self.image_ref(tag)])

    def build_and_push(self, push: bool = True, tags: Optional[List[str]] = None) -> List[CommandResult]:
        """
        Build every variant, then push them.

        Stops at the first failing command.

        Args:
            push: Push after building
            tags: Restrict to these tags (default: blue and green)
        """
        variants = [v for v in VARIANTS if tags is None or v[1] in tags]

        results = []
        for app_file, tag in variants:
            results.append(self.build(app_file, tag))
        if push:
            for _, tag in variants:
                results.append(self.push(tag))
        return results
