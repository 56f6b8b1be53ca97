# NOTE: This file is auto-generated. DO NOT EDIT!
# Update by running the __main__.py alongside this file

from typing import Final


RESOURCES: Final = {
    "precompiled_module.py.jinja": "IyBOT1RFOiBUaGlzIGZpbGUgaXMgYXV0by1nZW5lcmF0ZWQgYnkgcHJlY29tcGlsZWQge3sgdmVyc2lvbiB9fS4gRE8gTk9UIEVESVQhCiMgUmVnZW5lcmF0ZSBpdCBieSBydW5uaW5nIGBwcmVjb21waWxlZCBwcmVjb21waWxlYC4KCmZyb20gdHlwaW5nIGltcG9ydCBGaW5hbAoKZnJvbSBwcmVjb21waWxlZC5hc3NldHMgaW1wb3J0IEFzc2V0VGFibGUKZnJvbSBwcmVjb21waWxlZC5hc3NldHMgaW1wb3J0IHJlc29sdmVfYnl0ZXMgYXMgX3Jlc29sdmVfYnl0ZXMKZnJvbSBwcmVjb21waWxlZC5hc3NldHMgaW1wb3J0IHJlc29sdmVfdGV4dCBhcyBfcmVzb2x2ZV90ZXh0CgpBU1NFVFM6IEZpbmFsID0gQXNzZXRUYWJsZSgKICAgIHsKeyUtIGZvciBrZXksIHBheWxvYWQgaW4gYXNzZXRzICV9CiAgICAgICAge3sga2V5IHwgcHlyZXByIH19OiB7eyBwYXlsb2FkIHwgcHlyZXByIH19LCAgIyBmbXQ6IHNraXAKeyUtIGVuZGZvciAlfQogICAgfQopCgoKZGVmIHJlc29sdmVfdGV4dChwYXRoOiBzdHIpIC0+IHN0cjoKICAgIHJldHVybiBfcmVzb2x2ZV90ZXh0KEFTU0VUUywgcGF0aCkKCgpkZWYgcmVzb2x2ZV9ieXRlcyhwYXRoOiBzdHIpIC0+IGJ5dGVzOgogICAgcmV0dXJuIF9yZXNvbHZlX2J5dGVzKEFTU0VUUywgcGF0aCkK",  # fmt: skip
}

TEMPLATES: Final = {
    "precompiled_module.py": "precompiled_module.py.jinja",
}
