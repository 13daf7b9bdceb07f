from pathlib import Path
from setuptools import setup, find_packages

BASE_DIR = Path(__file__).parent

# ----------------------------------------------------------------------
# Version & requirements
# ----------------------------------------------------------------------
version = (BASE_DIR / ".version").read_text().strip()
long_description = (BASE_DIR / "README.md").read_text(encoding="utf-8")
requirements_lib = (BASE_DIR / "requirements_lib.txt").read_text().splitlines()

# ----------------------------------------------------------------------
# Extras handling
# ----------------------------------------------------------------------
extras = {
    "test": ["pytest"],
}

# ----------------------------------------------------------------------
setup(
    name="bytedance-ai",
    version=version,
    description="ByteDance (Volcengine) chat, text-to-speech and "
    "speech-to-text client library",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="Apache-2.0",
    packages=find_packages(
        where=".",
        include=["bytedance_ai_lib*"],
        exclude=("tests", "docs"),
    ),
    python_requires=">=3.10",
    install_requires=[r for r in requirements_lib if r.strip()],
    extras_require=extras,
)
