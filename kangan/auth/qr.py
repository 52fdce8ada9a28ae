import io

import qrcode


def render_to_image(uri: str, box_size: int = 10, border: int = 4) -> bytes:
    """Render a provisioning URI as PNG bytes for display on the enrollment screen."""
    qr = qrcode.QRCode(version=None, box_size=box_size, border=border)
    qr.add_data(uri)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    img_buffer = io.BytesIO()
    img.save(img_buffer, format='PNG')
    return img_buffer.getvalue()
