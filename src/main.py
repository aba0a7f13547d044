import logging
import signal
import sys
from typing import Optional

from app_config import AppConfigurationError, load_app_config, resolve_config_path
from audio import (
    AudioConfig,
    AudioConfigurationError,
    SoundCuePlayer,
    SoundDeviceAudioOutput,
)
from notifications import (
    LogNotificationBackend,
    NotificationError,
    NotificationService,
    create_notification_backend,
)
from runtime import RuntimeBootstrap, RuntimeEngine
from runtime.console import ConsolePresenter
from screen_lock import ScreenLockProbe, default_probe


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("pomodoro_app")


def setup_signal_handlers(engine: RuntimeEngine) -> None:
    """Set up graceful shutdown on SIGTERM and SIGINT."""

    def signal_handler(signum: int, frame) -> None:
        signal_name = signal.Signals(signum).name
        logging.getLogger("pomodoro_app").info("%s received, stopping...", signal_name)
        engine.request_stop()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)


def main() -> int:
    """Run the background pomodoro timer."""
    logger = setup_logging(level=logging.INFO)

    try:
        config_path = resolve_config_path()
        app_config = load_app_config()
        logging.getLogger().setLevel(app_config.logging.level)
        if app_config.source_file:
            logger.info("Loaded runtime config: %s", config_path)
        else:
            logger.info("No config file at %s, using defaults", config_path)
    except AppConfigurationError as error:
        logger.error("App configuration error: %s", error)
        return 1

    # Optional sound cues
    sound_player: Optional[SoundCuePlayer] = None
    if app_config.audio.enabled:
        try:
            audio_config = AudioConfig.from_settings(app_config.audio)
        except AudioConfigurationError as error:
            logger.error("Audio configuration error: %s", error)
            return 1
        sound_player = SoundCuePlayer(
            audio_config.sounds_dir,
            SoundDeviceAudioOutput(
                output_device_index=audio_config.output_device_index,
                blocksize=audio_config.blocksize,
                logger=logging.getLogger("audio.output"),
            ),
            volume=app_config.timer.sound_volume,
            logger=logging.getLogger("audio"),
        )
        logger.info("Sound cues enabled (%s)", audio_config.sounds_dir)

    # Desktop notifications
    notifications_logger = logging.getLogger("notifications")
    if app_config.notifications.enabled:
        try:
            backend = create_notification_backend(
                app_config.notifications.backend,
                sound=app_config.notifications.sound,
                logger=notifications_logger,
            )
        except NotificationError as error:
            logger.error("Notification configuration error: %s", error)
            return 1
    else:
        backend = LogNotificationBackend(logger=notifications_logger)
    notification_service = NotificationService(backend, logger=notifications_logger)
    logger.info("Notification backend: %s", type(backend).__name__)

    # Optional screen lock suspension
    lock_probe: Optional[ScreenLockProbe] = None
    if app_config.screen_lock.enabled:
        lock_probe = default_probe()
        if lock_probe is None:
            logger.warning("Screen lock detection is not supported on this platform.")

    engine = RuntimeEngine(
        RuntimeBootstrap(
            logger=logging.getLogger("runtime"),
            app_config=app_config,
            sound_player=sound_player,
            notification_service=notification_service,
            lock_probe=lock_probe,
            command_stream=sys.stdin,
            presenters=[ConsolePresenter(sys.stdout)],
        )
    )
    setup_signal_handlers(engine)
    return engine.run()


if __name__ == "__main__":
    sys.exit(main())
