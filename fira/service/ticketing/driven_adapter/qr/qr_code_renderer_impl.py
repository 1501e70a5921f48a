import base64
import io

from anyio import to_thread
import qrcode
from qrcode.constants import ERROR_CORRECT_L

from fira.service.ticketing.app.interface.i_qr_code_renderer import IQrCodeRenderer


class QrCodeRendererImpl(IQrCodeRenderer):
    """PNG rendering runs in a worker thread; Pillow encoding blocks."""

    def __init__(self, *, box_size: int = 10, border: int = 4) -> None:
        self.box_size = box_size
        self.border = border

    def _render_png(self, payload: str) -> bytes:
        qr = qrcode.QRCode(
            version=None,
            error_correction=ERROR_CORRECT_L,
            box_size=self.box_size,
            border=self.border,
        )
        qr.add_data(payload)
        qr.make(fit=True)
        image = qr.make_image(fill_color='black', back_color='white')
        buffer = io.BytesIO()
        image.save(buffer, format='PNG')
        return buffer.getvalue()

    async def render(self, *, payload: str) -> str:
        png = await to_thread.run_sync(self._render_png, payload)
        return f'data:image/png;base64,{base64.b64encode(png).decode()}'
