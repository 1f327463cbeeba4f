"""
Built-in deny list and rationale table.

These packages often have complex linking requirements, system dependencies,
or are deeply integrated into other packages' build processes.
"""

from .models import RationaleRule

KNOWN_PROBLEMATIC_PACKAGES = (
    # SSL/TLS and cryptography - system-level dependencies
    "openssl@3",
    "openssl@1.1",
    "openssl",
    "libressl",
    "gnutls",
    "libssh2",
    "libssh",

    # Python versions - complex dependency chains
    "python@3.11",
    "python@3.12",
    "python@3.10",
    "python@3.9",
    "python@3.13",

    # Event and async libraries - widely depended upon
    "libevent",
    "libuv",
    "libev",

    # HTTP/networking libraries
    "nghttp2",
    "curl",
    "wget",

    # GLib/GObject ecosystem - complex introspection
    "gobject-introspection",
    "glib",
    "gdk-pixbuf",
    "gtk+3",
    "cairo",
    "pango",

    # Node.js versions - complex native modules
    "node@20",
    "node@18",
    "node@16",
    "node",

    # Database clients with system dependencies
    "postgresql@14",
    "postgresql@15",
    "postgresql@16",
    "mysql-client",
    "libpq",

    # Compression libraries
    "zlib",
    "xz",
    "lz4",
    "zstd",
    "brotli",

    # Image libraries
    "libpng",
    "libjpeg",
    "libtiff",
    "webp",

    # ICU - Unicode support
    "icu4c",

    # Build tools that are deeply integrated
    "pkg-config",
    "cmake",
    "autoconf",
    "automake",
    "libtool",

    # Ruby versions
    "ruby@3.0",
    "ruby@3.1",
    "ruby@3.2",
    "ruby@3.3",

    # Other commonly problematic packages
    "gettext",
    "readline",
    "ncurses",
    "pcre",
    "pcre2",
)

DEFAULT_RATIONALE = "Known to cause migration issues"

# First matching rule wins, so more specific entries come first
RATIONALE_RULES = (
    # SSL/TLS
    RationaleRule("Core SSL/TLS library - many packages link against it", prefixes=("openssl",)),
    RationaleRule("GNU TLS library - system-level security dependency", names=("gnutls",)),
    RationaleRule("LibreSSL - alternative SSL library with wide usage", names=("libressl",)),
    RationaleRule("SSH library - security-critical dependency", prefixes=("libssh",)),

    # Python
    RationaleRule("Python runtime - complex virtual environment and pip dependencies",
                  names=("python",), prefixes=("python@",)),

    # Event libraries
    RationaleRule("Event notification library - used by many network tools", names=("libevent",)),
    RationaleRule("Async I/O library - core dependency for Node.js ecosystem", names=("libuv",)),
    RationaleRule("Event loop library - embedded in many applications", names=("libev",)),

    # HTTP/networking
    RationaleRule("HTTP/2 library - used by curl and many HTTP clients", names=("nghttp2",)),
    RationaleRule("URL transfer library - fundamental networking tool", names=("curl",)),
    RationaleRule("Network downloader - may have complex SSL dependencies", names=("wget",)),

    # GLib ecosystem
    RationaleRule("GObject introspection - required for many GTK/GNOME tools",
                  names=("gobject-introspection",)),
    RationaleRule("GLib core library - foundation for GTK ecosystem", names=("glib",)),
    RationaleRule("GTK/graphics library - complex native rendering dependencies",
                  names=("cairo", "pango"), prefixes=("gtk",)),
    RationaleRule("Image loading library - part of GTK stack", names=("gdk-pixbuf",)),

    # Node.js
    RationaleRule("Node.js runtime - native modules require specific linking", prefixes=("node",)),

    # Databases
    RationaleRule("PostgreSQL client - complex library dependencies",
                  names=("libpq",), prefixes=("postgresql",)),
    RationaleRule("MySQL client - database connectivity library", names=("mysql-client",)),

    # Compression
    RationaleRule("Core compression library - nearly universal dependency", names=("zlib",)),
    RationaleRule("Compression library - widely linked by other packages",
                  names=("xz", "lz4", "zstd", "brotli")),

    # Image libraries
    RationaleRule("Image format library - many graphics tools depend on it",
                  names=("libpng", "libjpeg", "libtiff", "webp")),

    # ICU
    RationaleRule("Unicode library - heavily depended upon for internationalization",
                  names=("icu4c",)),

    # Build tools
    RationaleRule("Build configuration tool - used during compilation", names=("pkg-config",)),
    RationaleRule("Build system - required for building many packages", names=("cmake",)),
    RationaleRule("GNU build tools - required for package compilation",
                  names=("autoconf", "automake", "libtool")),

    # Ruby
    RationaleRule("Ruby runtime - gem native extensions require specific linking",
                  names=("ruby",), prefixes=("ruby@",)),

    # Other
    RationaleRule("Internationalization library - widely used for translations", names=("gettext",)),
    RationaleRule("Command-line editing library - used by many CLI tools", names=("readline",)),
    RationaleRule("Terminal UI library - fundamental for terminal apps", names=("ncurses",)),
    RationaleRule("Regular expression library - used by many text processing tools",
                  names=("pcre", "pcre2")),
)
