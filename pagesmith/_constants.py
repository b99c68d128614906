"""Common literal values used across pagesmith.

These constants keep data keys and special topic identifiers centralized so
templates, builders, and tests can import the same values without drifting.

Examples
--------
>>> from pagesmith import _constants
>>> _constants.PARTIAL_TEMPLATE.format(name="footer")
'footer_partial'
>>> _constants.PRIMARY_DATA_KEY
'model'
"""

PRIMARY_DATA_KEY = "model"
PARTIAL_TEMPLATE = "{name}_partial"
TEMPLATE_SUFFIX = ".jinja"
HOME_TOPIC_ID = "WELCOME"
API_TOPIC_ID = "API"
README_TOPIC_ID = "README"
GENERATOR_NAME = "pagesmith"
VERSION = "0.1.0"
