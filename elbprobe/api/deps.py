# Route dependencies - pull the injected settings off the running app

from fastapi import Request

from elbprobe.core.config import Settings


def app_settings(request: Request) -> Settings:
    """
    Settings the app was built with.
    Use in route dependencies: `settings: Settings = Depends(app_settings)`
    """
    return request.app.state.settings
