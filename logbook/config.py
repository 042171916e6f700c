"""
Configuration loading for the logbook exporter.

Uses Python's built-in configparser (no extra dependencies).
Values come from config.ini, then LOGBOOK_<KEY> environment variables,
then CLI argument overrides.
"""

import configparser
import os

from .errors import ConfigInvalid


SOURCE_TYPES = ('xlsx', 'google')

DEFAULT_CONFIG = {
    'source': {
        'type': 'xlsx',
        'file_name': '',
        'api_key': '',
        'spreadsheet_id': '',
        'sheet_name': 'Flights',
        'start_row': '20',
    },
    'logbook': {
        'owner': 'Logbook Owner',
        'page_breaks': '',
        'reverse': 'true',
        'output': './logbook.pdf',
        'font_dir': '',
    },
    'map': {
        'filter_date': '',
        'no_routes': 'false',
        'output': './map.png',
        'custom_airports': '',
        'width': '1920',
        'height': '1080',
    },
}

# attr, section, key, kind
FIELDS = [
    ('source_type', 'source', 'type', 'str'),
    ('file_name', 'source', 'file_name', 'path'),
    ('api_key', 'source', 'api_key', 'str'),
    ('spreadsheet_id', 'source', 'spreadsheet_id', 'str'),
    ('sheet_name', 'source', 'sheet_name', 'str'),
    ('start_row', 'source', 'start_row', 'int'),
    ('owner', 'logbook', 'owner', 'str'),
    ('page_breaks', 'logbook', 'page_breaks', 'int_list'),
    ('reverse', 'logbook', 'reverse', 'bool'),
    ('logbook_output', 'logbook', 'output', 'path'),
    ('font_dir', 'logbook', 'font_dir', 'path'),
    ('filter_date', 'map', 'filter_date', 'str'),
    ('filter_no_routes', 'map', 'no_routes', 'bool'),
    ('map_output', 'map', 'output', 'path'),
    ('custom_airports', 'map', 'custom_airports', 'path'),
    ('map_width', 'map', 'width', 'int'),
    ('map_height', 'map', 'height', 'int'),
]

_BOOLEANS = configparser.ConfigParser.BOOLEAN_STATES


def parse_page_breaks(value):
    """Parse "50, 100" or a list into a list of page numbers.

    Raises:
        ConfigInvalid: If an entry is not a positive whole number.
    """
    if isinstance(value, str):
        items = [v.strip() for v in value.replace(';', ',').split(',')]
    else:
        items = list(value or [])
    breaks = []
    for item in items:
        if item == '':
            continue
        try:
            page = int(item)
        except (TypeError, ValueError):
            raise ConfigInvalid(
                f"Invalid page break {item!r}: expected a page number"
            ) from None
        if page < 1:
            raise ConfigInvalid(f"Invalid page break {page}: pages start at 1")
        breaks.append(page)
    return breaks


def _convert(kind, key, value, config_dir):
    if kind == 'int':
        try:
            return int(str(value).strip())
        except ValueError:
            raise ConfigInvalid(
                f"'{key}' must be a whole number, got {value!r}"
            ) from None
    if kind == 'bool':
        lowered = str(value).strip().lower()
        if lowered not in _BOOLEANS:
            raise ConfigInvalid(f"'{key}' must be true or false, got {value!r}")
        return _BOOLEANS[lowered]
    if kind == 'int_list':
        return parse_page_breaks(value)
    if kind == 'path':
        if value and not os.path.isabs(value):
            value = os.path.join(config_dir, value)
        return value
    return value


class Config:
    """Exporter configuration."""

    def __init__(self):
        self.source_type = 'xlsx'
        self.file_name = ''
        self.api_key = ''
        self.spreadsheet_id = ''
        self.sheet_name = 'Flights'
        self.start_row = 20
        self.owner = 'Logbook Owner'
        self.page_breaks = []
        self.reverse = True
        self.logbook_output = 'logbook.pdf'
        self.font_dir = ''
        self.filter_date = ''
        self.filter_no_routes = False
        self.map_output = 'map.png'
        self.custom_airports = ''
        self.map_width = 1920
        self.map_height = 1080

    @classmethod
    def from_file(cls, config_path, environ=None):
        """Load configuration from an INI file.

        Missing files are not an error: defaults apply.

        Args:
            config_path: Path to the config.ini file.
            environ: Mapping used for LOGBOOK_<KEY> overrides
                (default: os.environ).

        Returns:
            Config instance.

        Raises:
            ConfigInvalid: If a value cannot be converted.
        """
        environ = os.environ if environ is None else environ
        config = cls()
        parser = configparser.ConfigParser()

        # Set defaults
        for section, values in DEFAULT_CONFIG.items():
            parser[section] = values

        # Read user config
        if os.path.exists(config_path):
            parser.read(config_path, encoding='utf-8')

        # Resolve paths relative to config file directory
        config_dir = os.path.dirname(os.path.abspath(config_path))

        for attr, section, key, kind in FIELDS:
            value = parser.get(section, key, fallback='')
            env_key = f"LOGBOOK_{key.upper()}"
            if section == 'map' and key in ('output', 'width', 'height'):
                env_key = f"LOGBOOK_MAP_{key.upper()}"
            if env_key in environ:
                value = environ[env_key]
            setattr(config, attr, _convert(kind, key, value, config_dir))

        return config

    @staticmethod
    def write_default(config_path):
        """Write a config file holding the default values."""
        parser = configparser.ConfigParser()
        for section, values in DEFAULT_CONFIG.items():
            parser[section] = values
        with open(config_path, 'w', encoding='utf-8') as f:
            parser.write(f)

    def override(self, **kwargs):
        """Override config values from CLI arguments.

        Only overrides non-None values.
        """
        for key, value in kwargs.items():
            if value is None or not hasattr(self, key):
                continue
            if key == 'page_breaks':
                value = parse_page_breaks(value)
            setattr(self, key, value)

    def validate(self):
        """Check the source settings before any I/O happens.

        Raises:
            ConfigInvalid: If a field required by the source type is missing.
        """
        if self.source_type not in SOURCE_TYPES:
            raise ConfigInvalid(
                f"Unknown source type '{self.source_type}'.\n"
                f"Set type in the [source] section to one of: "
                f"{', '.join(SOURCE_TYPES)}."
            )
        if self.source_type == 'xlsx' and not self.file_name:
            raise ConfigInvalid(
                "No logbook workbook configured.\n"
                "Set file_name in the [source] section."
            )
        if self.source_type == 'google':
            missing = [name for name, value in (
                ('api_key', self.api_key),
                ('spreadsheet_id', self.spreadsheet_id),
            ) if not value]
            if missing:
                raise ConfigInvalid(
                    f"Google source needs {' and '.join(missing)} "
                    f"in the [source] section."
                )
        if not isinstance(self.start_row, int) or self.start_row < 1:
            raise ConfigInvalid(
                f"start_row must be 1 or more, got {self.start_row!r}"
            )

    def __repr__(self):
        return (
            f"Config(\n"
            f"  source_type='{self.source_type}',\n"
            f"  file_name='{self.file_name}',\n"
            f"  spreadsheet_id='{self.spreadsheet_id}',\n"
            f"  start_row={self.start_row},\n"
            f"  owner='{self.owner}',\n"
            f"  page_breaks={self.page_breaks},\n"
            f"  reverse={self.reverse},\n"
            f"  logbook_output='{self.logbook_output}',\n"
            f"  map_output='{self.map_output}',\n"
            f")"
        )
