from abc import ABC, abstractmethod


class IQrCodeRenderer(ABC):
    @abstractmethod
    async def render(self, *, payload: str) -> str:
        """Render payload as a QR image; returns a `data:image/png;base64,...` URL."""
        pass
