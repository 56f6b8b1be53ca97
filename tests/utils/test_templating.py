import jinja2
import pytest

from precompiled.resource_bundle import get_resource_str, get_template_str
from precompiled.resource_bundle.data import RESOURCES, TEMPLATES
from precompiled.utils.templating import EmbeddedLoader, render_template_str


def test_bundled_resources() -> None:
    assert TEMPLATES["precompiled_module.py"] == "precompiled_module.py.jinja"
    for name in TEMPLATES.values():
        assert name in RESOURCES

    tmpl = get_template_str("precompiled_module.py")
    assert tmpl is not None
    assert tmpl == get_resource_str("precompiled_module.py.jinja")
    assert "def resolve_text(path: str) -> str:" in tmpl
    assert "{%- for key, payload in assets %}" in tmpl


def test_missing_resources() -> None:
    assert get_resource_str("nonexistent") is None
    assert get_template_str("nonexistent") is None


def test_render_template_str() -> None:
    s = render_template_str(
        "precompiled_module.py",
        {"version": "1.2.3", "assets": [("k", "dg")]},
    )
    assert "precompiled 1.2.3" in s
    assert "        'k': 'dg',  # fmt: skip\n" in s
    assert s.endswith("return _resolve_bytes(ASSETS, path)\n")

    with pytest.raises(jinja2.TemplateNotFound):
        render_template_str("nonexistent", {})


def test_embedded_loader_empty_template(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "precompiled.utils.templating.get_template_str",
        lambda name: "",
    )
    env = jinja2.Environment(loader=EmbeddedLoader())
    assert EmbeddedLoader().get_source(env, "empty") == ("", None, None)
    assert env.get_template("empty").render() == ""
