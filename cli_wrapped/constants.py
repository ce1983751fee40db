"""Constants for CLI Wrapped.

Centralizes limits, thresholds and the ordered rule tables used by the
analyzers. Rule tables are matched first-to-last and the first hit wins,
so their order is part of their behaviour.
"""

# =============================================================================
# History sources
# =============================================================================

ZSH_HISTORY_FILE = ".zsh_history"
BASH_HISTORY_FILE = ".bash_history"
FISH_HISTORY_FILE = "fish/fish_history"  # Relative to the XDG data dir
DEFAULT_XDG_DATA_DIR = ".local/share"

# macOS Terminal writes one fragment per session here
ZSH_SESSIONS_DIR = ".zsh_sessions"
ZSH_SESSION_GLOB = "*.history"

# Below this size ~/.zsh_history is treated as not worth reading alone
ZSH_HISTORY_MIN_BYTES = 1024

# =============================================================================
# Analysis limits and thresholds
# =============================================================================

DEFAULT_TOP_COMMANDS = 15
REPEAT_STREAK_LENGTH = 3  # Same command this many times in a row
TYPO_MIN_COUNT = 2
MAN_PAGE_MIN_LOOKUPS = 2
LOYALTY_THRESHOLD = 80.0  # Percent share of package-manager invocations

DAY_NAMES = [
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]
DEFAULT_PEAK_DAY = "Monday"
DEFAULT_GIT_COMMAND = "status"

# =============================================================================
# Share codes
# =============================================================================

SHARE_TOP_COMMANDS = 5
SHARE_TOP_STRUGGLES = 3
SHARE_TOP_PACKAGE_MANAGERS = 2
HEATMAP_QUANT_SCALE = 15

# =============================================================================
# CLI
# =============================================================================

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M"

# =============================================================================
# Typo rules: (pattern, intended command)
# =============================================================================

TYPO_PATTERNS = [
    # git
    (r"^gut\b", "git"),
    (r"^gti\b", "git"),
    (r"^got\s+(commit|push|pull|status|add|checkout)", "git"),
    (r"^giut\b", "git"),
    # ls
    (r"^sl\b", "ls"),
    # cd.. without the space
    (r"^cd\.\.", "cd .."),
    # cat
    (r"^cta\b", "cat"),
    (r"^act\b", "cat"),
    # npm
    (r"^nmp\b", "npm"),
    (r"^nppm\b", "npm"),
    (r"^nom\b", "npm"),
    # yarn
    (r"^yarrn\b", "yarn"),
    (r"^yran\b", "yarn"),
    # pnpm
    (r"^pnmp\b", "pnpm"),
    (r"^pnm\b", "pnpm"),
    # bun
    (r"^bnu\b", "bun"),
    (r"^ubn\b", "bun"),
    # python
    (r"^pythno\b", "python"),
    (r"^pyhton\b", "python"),
    (r"^pytohn\b", "python"),
    # docker
    (r"^dcoker\b", "docker"),
    (r"^dokcer\b", "docker"),
    (r"^docekr\b", "docker"),
    # kubectl
    (r"^kuebctl\b", "kubectl"),
    (r"^kubeclt\b", "kubectl"),
    (r"^kubetcl\b", "kubectl"),
    # clear
    (r"^claer\b", "clear"),
    (r"^cealr\b", "clear"),
    (r"^clera\b", "clear"),
    # exit
    (r"^eixt\b", "exit"),
    (r"^exti\b", "exit"),
    # grep
    (r"^grpe\b", "grep"),
    (r"^gerp\b", "grep"),
    # mkdir
    (r"^mkdri\b", "mkdir"),
    (r"^mdkir\b", "mkdir"),
    (r"^mkdor\b", "mkdir"),
    # editors
    (r"^ocde\b", "code"),
    (r"^cdoe\b", "code"),
    (r"^cusror\b", "cursor"),
    (r"^cursro\b", "cursor"),
]

# =============================================================================
# Git
# =============================================================================

# Each category is tested independently against a git-related command line
GIT_PATTERNS = {
    "commit": r"^(git\s+commit|gc\s|gcmsg?\s)",
    "push": r"^(git\s+push|gp\s|gp$|ggpush)",
    "pull": r"^(git\s+pull|gl\s|gl$|ggpull|gup)",
    "branch": r"^(git\s+(branch|switch|checkout\s+-b)|gco\s+-b|gsw\s)",
    "merge": r"^(git\s+merge|gm\s)",
    "rebase": r"^(git\s+rebase|grb)",
    "stash": r"^(git\s+stash|gsta)",
}

# Common oh-my-zsh style aliases and what they expand to
GIT_ALIASES = {
    "g": "git",
    "ga": "git add",
    "gaa": "git add --all",
    "gc": "git commit",
    "gcmsg": "git commit -m",
    "gco": "git checkout",
    "gsw": "git switch",
    "gp": "git push",
    "gl": "git pull",
    "gst": "git status",
    "gd": "git diff",
    "glog": "git log",
    "gb": "git branch",
    "gm": "git merge",
    "grb": "git rebase",
    "gsta": "git stash",
    "gstp": "git stash pop",
}

# =============================================================================
# Package managers: (name, prefix patterns)
# =============================================================================

PACKAGE_MANAGER_PATTERNS = [
    ("pnpm", [r"^pnpm\b", r"^pnpx\b"]),
    ("npm", [r"^npm\b", r"^npx\b"]),
    ("yarn", [r"^yarn\b"]),
    ("bun", [r"^bun\b", r"^bunx\b"]),
    ("deno", [r"^deno\b"]),
    ("pip", [r"^pip3?\b", r"^pipx\b"]),
    ("cargo", [r"^cargo\b"]),
    ("go", [r"^go\s+(get|install|mod)\b"]),
    ("brew", [r"^brew\b"]),
    ("apt", [r"^(sudo\s+)?apt(-get)?\b"]),
    ("composer", [r"^composer\b"]),
    ("gem", [r"^gem\b", r"^bundle\b"]),
]

# =============================================================================
# Fallback roasts
# =============================================================================

COMMAND_VOLUME_HIGH = 10000
COMMAND_VOLUME_MEDIUM = 3000
LATE_NIGHT_START = 22  # Peak hours from here to LATE_NIGHT_END are roasted
LATE_NIGHT_END = 4
