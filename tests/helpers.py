import base64
import io
from PIL import Image


TENANT_MARKUP = (
    "<p>Section one /init1/</p>"
    "<p>Section two /init2/</p>"
    "<p>Tenant: /sig_tenant/</p>"
)


def decode_data_url(data_url: str) -> Image.Image:
    assert data_url.startswith("data:image/png;base64,")
    raw = base64.b64decode(data_url.split(",", 1)[1])
    return Image.open(io.BytesIO(raw))
