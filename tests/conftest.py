"""Shared fixtures: an on-disk assets tree and a fake LaTeX compiler."""

import sys
from pathlib import Path

import pytest

from latexcompile.contexts.rendering.command import CommandSpec

MINIMAL_TEX = rb"""\documentclass{article}
\usepackage[margin=0.7in]{geometry}
\usepackage[parfill]{parskip}
\usepackage[utf8]{inputenc}
\begin{document}
Minimal
\end{document}"""

CARD_TEX = rb"""\documentclass{article}
\begin{document}
##name## -- ##title##
\end{document}"""

# PNG signature followed by bytes that are not valid UTF-8 and a fake token
LOGO_PNG = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\xff\xfe##name##\x00\x80\x81"

# Stands in for pdflatex: writes <stem>.aux, <stem>.log and <stem>.pdf into cwd.
# Options (before the main file): --no-output, --exit=N, --ext=.xyz
FAKE_COMPILER = r'''
import sys
from pathlib import Path

options = sys.argv[1:-1]
main = Path(sys.argv[-1])
exit_code = 0
extension = ".pdf"
for option in options:
    if option.startswith("--exit="):
        exit_code = int(option.split("=", 1)[1])
    if option.startswith("--ext="):
        extension = option.split("=", 1)[1]

counter = Path("passes.txt")
count = int(counter.read_text()) + 1 if counter.exists() else 1
counter.write_text(str(count))

Path(main.stem + ".aux").write_text("pass %d\n" % count)

if "--no-output" in options:
    Path(main.stem + ".log").write_text(
        "! Undefined control sequence.\nLaTeX Warning: Reference `sec:x' undefined.\n"
    )
else:
    Path(main.stem + ".log").write_text("LaTeX Warning: Label(s) may have changed.\n")
    body = main.read_bytes()
    Path(main.stem + extension).write_bytes(b"%PDF-1.4\n% pass=" + str(count).encode() + b"\n" + body)

sys.stdout.write("This is FakeTeX, pass %d\n" % count)
sys.exit(exit_code)
'''


@pytest.fixture
def assets_dir(tmp_path):
    """Create assets/{main.tex,card.tex,logo.png,nested/main.tex} under tmp_path."""
    assets = tmp_path / "assets"
    (assets / "nested").mkdir(parents=True)
    (assets / "main.tex").write_bytes(MINIMAL_TEX)
    (assets / "card.tex").write_bytes(CARD_TEX)
    (assets / "logo.png").write_bytes(LOGO_PNG)
    (assets / "nested" / "main.tex").write_bytes(MINIMAL_TEX)
    return assets


@pytest.fixture
def fake_compiler_script(tmp_path):
    script = tmp_path / "fake_latex.py"
    script.write_text(FAKE_COMPILER)
    return script


@pytest.fixture
def fake_command(fake_compiler_script):
    """CommandSpec running the fake compiler through the current interpreter."""
    return CommandSpec(sys.executable, (str(fake_compiler_script),))


@pytest.fixture
def asset_bytes():
    """Expected content of each file created by assets_dir, keyed by base name."""
    return {"main.tex": MINIMAL_TEX, "card.tex": CARD_TEX, "logo.png": LOGO_PNG}
