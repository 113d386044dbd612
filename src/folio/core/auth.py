"""Viewer session supplied by the hosting application."""

from pydantic import BaseModel, ConfigDict, Field


class ViewerSession(BaseModel):
    """Authentication state of the person looking at a profile.

    Folio never manages login itself; the host builds one of these from its
    persisted credentials and hands it to each controller, which passes it to the client per call.
    """

    user_id: int | None = Field(None, description="Authenticated viewer's profile ID")
    access_token: str | None = Field(None, description="Bearer token for the service")

    model_config = ConfigDict(frozen=True)

    @property
    def is_logged_in(self) -> bool:
        return bool(self.access_token)

    def is_subject(self, profile_id: int | None) -> bool:
        """Whether the viewer is the profile being shown."""
        return self.is_logged_in and profile_id is not None and self.user_id == profile_id

    @property
    def authorization_headers(self) -> dict[str, str]:
        if not self.access_token:
            return {}
        return {"Authorization": f"Bearer {self.access_token}"}


ANONYMOUS = ViewerSession()
