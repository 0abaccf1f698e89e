"""Docker Desktop, installed from its disk image into ~/Applications."""

from pathlib import Path

from setupmac.core.step import StepStatus
from setupmac.steps.base import BaseStep
from setupmac.system.artifacts import mounted_image, temporary_download
from setupmac.system.command import Command

DOCKER_PATH_LINE = 'export PATH="$HOME/.docker/bin:$PATH"'


class DockerDesktop(BaseStep):
    """Download, mount and copy Docker.app, then launch it.

    The disk image is detached and deleted on every exit path. The CLI path
    line is contributed whether or not the install branch ran.
    """

    step_name = "docker"
    label = "Docker Desktop"
    section = "Setting up Docker Environment"
    is_required = True

    async def is_satisfied(self) -> bool:
        return self.has_command("docker") or self.adopt_binary(
            self.home / ".docker" / "bin" / "docker"
        )

    async def apply(self) -> None:
        docker = self.config.docker
        install_dir = Path(docker.install_dir)
        app = self.home / install_dir / docker.app

        self.reporter.info("Downloading Docker Desktop...")
        async with temporary_download(
            self.system, docker.dmg_url, self.workdir, "Docker.dmg"
        ) as image:
            self.reporter.info("Mounting Docker Desktop DMG...")
            async with mounted_image(self.system, image, docker.volume) as volume:
                self.reporter.info("Installing Docker Desktop...")
                await self.system.mk_home_subdir(install_dir)
                await self.system.run(
                    Command(
                        executable="cp",
                        args=["-R", str(volume / docker.app), str(self.home / install_dir) + "/"],
                    )
                )
            self.reporter.info("Cleaning up...")

        self.reporter.info("Launching Docker Desktop...")
        await self.system.run(Command(executable="open", args=[str(app)]))
        self.system.add_to_path(self.home / ".docker" / "bin")

    def profile_lines(self, status: StepStatus) -> list[str]:
        if status is StepStatus.FAILED:
            return []
        return [DOCKER_PATH_LINE]

    def skip_message(self) -> str:
        return "Docker already installed"

    def success_message(self) -> str:
        return "Docker Desktop installed and configured successfully"
