import os
import re

TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), "templates")
CSPROJ_TEMPLATE = "CsProj.txt"

PLATFORM = "$PLATFORM$"
CODE_FILE_NAME = "$CODEFILENAME$"
CSPROJ_PATH = "$CSPROJPATH$"
TFM = "$TFM$"
PROGRAM_NAME = "$PROGRAMNAME$"
RUNTIME_SETTINGS = "$RUNTIMESETTINGS$"
COPIED_SETTINGS = "$COPIEDSETTINGS$"
CONFIGURATION_NAME = "$CONFIGURATIONNAME$"
SDK_NAME = "$SDKNAME$"

PLACEHOLDERS = (
    PLATFORM,
    CODE_FILE_NAME,
    CSPROJ_PATH,
    TFM,
    PROGRAM_NAME,
    RUNTIME_SETTINGS,
    COPIED_SETTINGS,
    CONFIGURATION_NAME,
    SDK_NAME,
)

_PLACEHOLDER_PATTERN = re.compile("|".join(re.escape(p) for p in PLACEHOLDERS))


def render(template, substitutions):
    """Replace the known ``$NAME$`` placeholders in ``template``.

    Substituted values are not scanned again, and tokens outside
    ``PLACEHOLDERS`` are left untouched. A placeholder with no entry in
    ``substitutions`` is left as is.
    """
    unknown = set(substitutions) - set(PLACEHOLDERS)
    if unknown:
        raise KeyError(f"Unknown placeholder(s): {', '.join(sorted(unknown))}")

    def _replace(match):
        token = match.group(0)
        return substitutions.get(token, token)

    return _PLACEHOLDER_PATTERN.sub(_replace, template)


def list_templates():
    if not os.path.isdir(TEMPLATES_DIR):
        return []
    return sorted(os.listdir(TEMPLATES_DIR))


def load_template(name):
    template_path = os.path.join(TEMPLATES_DIR, name)
    if not os.path.isfile(template_path):
        raise FileNotFoundError(f"Template '{name}' not found in {TEMPLATES_DIR}")
    with open(template_path, "r", encoding="utf-8") as f:
        return f.read()
