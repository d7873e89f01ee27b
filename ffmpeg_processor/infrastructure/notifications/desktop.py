"""Desktop notification permission gate."""

import asyncio

from desktop_notifier import Button, DesktopNotifier, Urgency

from ffmpeg_processor.commons.telemetry import get_logger
from ffmpeg_processor.infrastructure.notifications.base import PermissionGateBase


class DesktopPermissionGate(PermissionGateBase):
    """Permission prompts shown as native desktop notifications.

    The notification carries an allow and a deny button. Only an explicit
    press of the allow button approves the action; deny, dismissal, a
    timeout or a failure to show the notification all reject it.
    """

    def __init__(
        self,
        notifier: DesktopNotifier | None = None,
        app_name: str = "FFmpegProcessor",
        title: str = "FFmpeg Processor Permission Request",
        timeout_seconds: int = 60,
        allow_label: str = "Allow",
        deny_label: str = "Deny",
    ) -> None:
        """Initialize the gate.

        Args:
            notifier: Notifier to send through. Created lazily if omitted.
            app_name: Application name shown by the desktop environment.
            title: Notification title.
            timeout_seconds: How long to wait for an answer.
            allow_label: Text of the approving button.
            deny_label: Text of the rejecting button.
        """
        self._notifier = notifier
        self._app_name = app_name
        self._title = title
        self._timeout = timeout_seconds
        self._allow_label = allow_label
        self._deny_label = deny_label
        self._logger = get_logger(__name__)

    def _get_notifier(self) -> DesktopNotifier:
        if self._notifier is None:
            self._notifier = DesktopNotifier(app_name=self._app_name)
        return self._notifier

    async def request(self, action: str) -> bool:
        """Show the prompt and wait for the user's answer."""
        loop = asyncio.get_running_loop()
        decision: asyncio.Future[bool] = loop.create_future()

        def _set(allowed: bool) -> None:
            if not decision.done():
                decision.set_result(allowed)

        def _resolve(allowed: bool) -> None:
            # Backends may fire callbacks from their own thread
            loop.call_soon_threadsafe(_set, allowed)

        try:
            await self._get_notifier().send(
                title=self._title,
                message=action,
                urgency=Urgency.Critical,
                buttons=[
                    Button(title=self._allow_label, on_pressed=lambda: _resolve(True)),
                    Button(title=self._deny_label, on_pressed=lambda: _resolve(False)),
                ],
                on_dismissed=lambda: _resolve(False),
                timeout=self._timeout,
            )
        except Exception:
            self._logger.exception("Error showing notification")
            return False

        try:
            allowed = await asyncio.wait_for(decision, timeout=self._timeout)
        except TimeoutError:
            self._logger.warning(
                "Permission request timed out",
                extra={"action": action, "timeout_seconds": self._timeout},
            )
            return False

        self._logger.info(
            "Permission request answered",
            extra={"action": action, "allowed": allowed},
        )
        return allowed
