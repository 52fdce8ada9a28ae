"""
Tests for provisioning URI rendering.
"""
import unittest

from kangan.auth.qr import render_to_image
from kangan.auth.totp import build_provisioning_uri

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'


class TestRenderToImage(unittest.TestCase):

    def test_renders_png(self):
        uri = build_provisioning_uri("JBSWY3DPEHPK3PXPJBSWY3DPEHPK3PXP", "HarshKanganStore",
                                     "admin@harshkangan.com")
        image = render_to_image(uri)
        self.assertTrue(image.startswith(PNG_SIGNATURE))

    def test_rendering_is_pure(self):
        uri = build_provisioning_uri("JBSWY3DPEHPK3PXPJBSWY3DPEHPK3PXP", "Shop", "a@b.c")
        self.assertEqual(render_to_image(uri), render_to_image(uri))


if __name__ == '__main__':
    unittest.main()
