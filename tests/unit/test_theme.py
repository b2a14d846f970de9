"""Unit tests for the theme configuration."""

import json

import pytest

from folio.contexts.styling.theme import (
    GENERATED_HEADER,
    ThemeConfig,
    ThemeConfigError,
    content_files,
    load_theme,
    to_tailwind_config,
    write_tailwind_config,
)


def _write(tmp_path, text, name="theme.yaml"):
    path = tmp_path / name
    path.write_text(text)
    return path


@pytest.fixture
def repo_theme(repo_config_dir):
    return load_theme(repo_config_dir / "theme.yaml")


@pytest.mark.unit
def test_repo_theme_loads(repo_theme):
    assert repo_theme.content == [
        "./web/templates/**/*.html",
        "./internal/interfaces/http/**/*.go",
    ]
    # Integer shade names from YAML come back as strings
    assert repo_theme.colors["primary"]["500"] == "#3b82f6"
    assert repo_theme.animations["blob"] == "blob 7s infinite"
    assert repo_theme.keyframes["fadeInUp"]["from"]["opacity"] == "0"
    assert "0%, 100%" in repo_theme.keyframes["blob"]


@pytest.mark.unit
def test_missing_theme_file(tmp_path):
    with pytest.raises(ThemeConfigError, match="not found"):
        load_theme(tmp_path / "nope.yaml")


@pytest.mark.unit
def test_unknown_section(tmp_path):
    path = _write(tmp_path, "content: ['./a/*.html']\nplugins: []\n")
    with pytest.raises(ThemeConfigError, match="plugins"):
        load_theme(path)


@pytest.mark.unit
def test_content_required(tmp_path):
    path = _write(tmp_path, "colors:\n  brand: '#fff'\n")
    with pytest.raises(ThemeConfigError, match="content glob"):
        load_theme(path)


@pytest.mark.unit
@pytest.mark.parametrize("bad", ["blue", "#12", "#gggggg", "3b82f6"])
def test_colors_must_be_hex(bad):
    theme = ThemeConfig(content=["*.html"], colors={"primary": {"500": bad}})
    with pytest.raises(ThemeConfigError, match="primary.500"):
        theme.validate()


@pytest.mark.unit
def test_flat_color_accepted():
    ThemeConfig(content=["*.html"], colors={"ink": "#111827"}).validate()


@pytest.mark.unit
def test_animation_must_reference_keyframes():
    theme = ThemeConfig(content=["*.html"], animations={"wiggle": "wiggle 1s ease-in-out infinite"})
    with pytest.raises(ThemeConfigError, match="undefined keyframes: wiggle"):
        theme.validate()


@pytest.mark.unit
def test_animation_may_use_builtin_keyframes():
    ThemeConfig(content=["*.html"], animations={"slow-spin": "spin 3s linear infinite"}).validate()


@pytest.mark.unit
@pytest.mark.parametrize("selector", ["middle", "150%", "0%, halfway", "50"])
def test_keyframe_selectors_validated(selector):
    theme = ThemeConfig(content=["*.html"], keyframes={"pop": {selector: {"opacity": "1"}}})
    with pytest.raises(ThemeConfigError, match="pop"):
        theme.validate()


@pytest.mark.unit
def test_keyframe_selector_lists_accepted():
    ThemeConfig(
        content=["*.html"],
        keyframes={"pulse2": {"0%, 100%": {"opacity": "1"}, "50%": {"opacity": "0.5"}}},
    ).validate()


@pytest.mark.unit
def test_content_files(tmp_path, repo_theme):
    (tmp_path / "web" / "templates" / "pages").mkdir(parents=True)
    (tmp_path / "web" / "templates" / "pages" / "resume.html").write_text("<html></html>")
    (tmp_path / "web" / "templates" / "base.html").write_text("<html></html>")
    (tmp_path / "web" / "templates" / "notes.txt").write_text("ignored")

    files = content_files(repo_theme, tmp_path)

    assert files == sorted(
        [
            tmp_path / "web" / "templates" / "base.html",
            tmp_path / "web" / "templates" / "pages" / "resume.html",
        ]
    )


@pytest.mark.unit
def test_tailwind_export(repo_theme):
    text = to_tailwind_config(repo_theme)

    assert text.startswith(GENERATED_HEADER)
    body = text[len(GENERATED_HEADER):]
    assert body.startswith("module.exports = ")
    config = json.loads(body[len("module.exports = "):].rstrip().rstrip(";"))

    assert config["content"] == repo_theme.content
    assert config["plugins"] == []
    extend = config["theme"]["extend"]
    assert extend["colors"]["primary"]["900"] == "#1e3a8a"
    assert extend["animation"]["fade-in-up"] == "fadeInUp 0.6s ease-out forwards"
    assert extend["keyframes"]["blob"]["33%"]["transform"] == "translate(30px, -50px) scale(1.1)"


@pytest.mark.unit
def test_write_tailwind_config(tmp_path, repo_theme):
    output = write_tailwind_config(repo_theme, tmp_path / "site" / "tailwind.config.js")

    assert output.exists()
    assert output.read_text() == to_tailwind_config(repo_theme)
