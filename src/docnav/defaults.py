"""Default theme settings."""

MODULES = "Modules"
CLASSES = "Classes"
EXTERNALS = "Externals"
EVENTS = "Events"
NAMESPACES = "Namespaces"
MIXINS = "Mixins"
TUTORIALS = "Tutorials"
INTERFACES = "Interfaces"
GLOBAL = "Global"

SECTION_KINDS = (
    MODULES,
    CLASSES,
    EXTERNALS,
    EVENTS,
    NAMESPACES,
    MIXINS,
    TUTORIALS,
    INTERFACES,
    GLOBAL,
)
DEFAULT_SECTIONS = list(SECTION_KINDS)

DEFAULT_TITLE = "Documentation"
DEFAULT_DESTINATION = "./out/"
SEARCH_DATA_PATH = "data/search.json"
SIDEBAR_DATA_PATH = "data/sidebar.json"
