import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..core.config import SystemConfig
from ..core.control import SessionController
from . import control

logger = logging.getLogger(__name__)


def init_app(
    controller: Optional[SessionController] = None,
    config: Optional[SystemConfig] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    A controller passed in is used as-is (tests inject one wired to a mock
    driver and a manual clock). Otherwise one is built from the config on
    startup and stopped on shutdown.
    """
    app = FastAPI(
        title="blink1-server",
        description="HTTP control of a blink(1) USB notification light",
        version="1.0.0",
    )

    # Browser notification widgets call the API from other origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.state.config = config or (controller.config if controller else None)
    app.state.session_controller = controller
    app.state.owns_controller = controller is None

    app.include_router(control.router)
    app.include_router(control.help_router)

    @app.on_event("startup")
    async def startup_event():
        """Build the session on startup"""
        if app.state.session_controller is not None:
            return

        logger.info("Starting blink1-server")
        try:
            if app.state.config is None:
                app.state.config = SystemConfig.create_default()
                logger.info("Configuration loaded")

            controller = SessionController(app.state.config)
            controller.start()
            app.state.session_controller = controller
            logger.info("Session controller initialized")
        except Exception as e:
            logger.error(f"Failed to initialize session: {e}")
            app.state.session_controller = None
            raise

    @app.on_event("shutdown")
    async def shutdown_event():
        """Cancel pending animations and release the device"""
        controller = app.state.session_controller
        if controller is None or not app.state.owns_controller:
            return

        logger.info("Shutting down blink1-server")
        try:
            logger.debug(f"Final session state: {controller.get_state()}")
            controller.stop()
        except Exception as e:
            logger.error(f"Error during shutdown: {e}")
        finally:
            app.state.session_controller = None

    return app


# Create the application instance
app = init_app()

# This allows running with either app or init_app
__all__ = ["app", "init_app"]
