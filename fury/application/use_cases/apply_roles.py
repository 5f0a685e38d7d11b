"""
Apply Roles Use Case

Architectural Intent:
- Drives one provisioning run against one target
- Merges roles up front so a conflict aborts before any remote work
- Runs the stages strictly in order, failing fast:
    pre-run hooks -> package install -> file deployment -> post-run hooks
- Nothing is rolled back; the host keeps whatever completed stages did

File deployment:
- The archive producer and the remote extraction command are connected by
  an OS pipe and run concurrently, since neither side can buffer an
  unbounded archive
- Once the command returns, the read end is closed so a producer blocked
  on a write is released; the command's error takes precedence
"""

import asyncio
import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Awaitable, Callable, Optional, Sequence, TextIO
from fury.application.dtos.apply_dtos import ApplyReport, ApplyStage
from fury.application.run_context import RunContext
from fury.domain.entities.role import Role
from fury.domain.errors import ConflictError, HookError
from fury.domain.ports.executor_port import ExecutorPort
from fury.domain.services.role_merger import merge_roles
from fury.domain.value_objects.command import Command
from fury.domain.value_objects.file_entry import File
from fury.infrastructure.archive_streamer import stream_tar_gz

logger = logging.getLogger(__name__)

INSTALL_COMMAND = ("apt-get", "-y", "install")
EXTRACT_COMMAND = ("tar", "-z", "-x", "-v", "-f-", "-P", "-C/")


class ApplyRoles:
    def __init__(
        self,
        executor: ExecutorPort,
        log: Optional[TextIO] = None,
        log_output: bool = True,
        install_command: Sequence[str] = INSTALL_COMMAND,
        extract_command: Sequence[str] = EXTRACT_COMMAND,
    ) -> None:
        self.executor = executor
        self.log = log
        self.log_output = log_output
        self.install_command = tuple(install_command)
        self.extract_command = tuple(extract_command)

    async def execute(self, roles: Sequence[Role]) -> ApplyReport:
        started = time.monotonic()
        try:
            state = merge_roles(roles)
        except ConflictError as e:
            logger.error("Roles do not merge: %s", e)
            raise
        ctx = RunContext(self.executor, log=self.log, log_output=self.log_output)

        stages: list[tuple[ApplyStage, Callable[[], Awaitable[None]]]] = [
            (ApplyStage.PRE_RUN, lambda: self._run_hooks(ctx, roles, ApplyStage.PRE_RUN)),
            (ApplyStage.PACKAGES, lambda: self._install_packages(ctx, state.packages)),
            (ApplyStage.FILES, lambda: self._deploy_files(ctx, state.files)),
            (ApplyStage.POST_RUN, lambda: self._run_hooks(ctx, roles, ApplyStage.POST_RUN)),
        ]
        completed: list[ApplyStage] = []
        for stage, step in stages:
            logger.info("Starting stage %s", stage.value, extra={"stage": stage.value})
            try:
                await step()
            except Exception as e:
                e.add_note(f"apply stage: {stage.value}")
                logger.error(
                    "Stage %s failed: %s", stage.value, e, extra={"stage": stage.value}
                )
                raise
            completed.append(stage)

        elapsed = time.monotonic() - started
        logger.info("Apply finished in %.2fs", elapsed)
        return ApplyReport(
            packages=state.packages,
            paths=state.paths,
            stages=tuple(completed),
            invocations=ctx.invocations,
            elapsed_seconds=elapsed,
        )

    async def _run_hooks(
        self, ctx: RunContext, roles: Sequence[Role], stage: ApplyStage
    ) -> None:
        for role in roles:
            hook = role.pre_run if stage is ApplyStage.PRE_RUN else role.post_run
            if hook is None:
                continue
            if await hook(ctx) is False:
                raise HookError(f"{stage.value} hook of role {role} reported failure")

    async def _install_packages(self, ctx: RunContext, packages: Sequence[str]) -> None:
        logger.info("Installing %d packages", len(packages))
        await ctx.run(*self.install_command, *packages)

    async def _deploy_files(self, ctx: RunContext, files: Sequence[File]) -> None:
        logger.info("Deploying %d files", len(files))
        read_fd, write_fd = os.pipe()
        reader = open(read_fd, "rb")
        writer = open(write_fd, "wb")
        extract = Command.from_argv(*self.extract_command, stdin=reader)

        loop = asyncio.get_event_loop()
        with ThreadPoolExecutor(max_workers=1, thread_name_prefix="fury-archive") as pool:
            producer = loop.run_in_executor(pool, stream_tar_gz, writer, files)
            try:
                await ctx.run_command(extract)
            except BaseException:
                reader.close()
                await asyncio.wait([producer])
                if producer.exception() is not None:
                    logger.debug("Archive producer failed too: %s", producer.exception())
                raise
            reader.close()
            await producer


async def apply(
    executor: ExecutorPort, roles: Sequence[Role], **kwargs
) -> ApplyReport:
    """Provisions the executor's target with the given roles."""
    return await ApplyRoles(executor, **kwargs).execute(roles)
