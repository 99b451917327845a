"""Registered hook keys.

Every hook family has a normal and a -print key. The mountpoint wrappers have
only one key each; they take their mode from the hook they wrap.
"""

PRINT_SUFFIX = "-print"

QUICKNET = "@quicknet"
QUICKNET_PRINT = QUICKNET + PRINT_SUFFIX

MKINITCPIO = "@mkinitcpio"
MKINITCPIO_PRINT = MKINITCPIO + PRINT_SUFFIX

REPLACE_TOKEN = "@replace-token"
REPLACE_TOKEN_PRINT = REPLACE_TOKEN + PRINT_SUFFIX

UNCOMMENT = "@uncomment"
UNCOMMENT_PRINT = UNCOMMENT + PRINT_SUFFIX
UNCOMMENT_ALL = "@uncomment-all"
UNCOMMENT_ALL_PRINT = UNCOMMENT_ALL + PRINT_SUFFIX

MNT = "@mnt"
NO_MNT = "@no-mnt"
WRAPPER_KEYS: tuple[str, ...] = (MNT, NO_MNT)

HOOK_KEYS: tuple[str, ...] = (
    MNT,
    NO_MNT,
    QUICKNET,
    QUICKNET_PRINT,
    MKINITCPIO,
    MKINITCPIO_PRINT,
    REPLACE_TOKEN,
    REPLACE_TOKEN_PRINT,
    UNCOMMENT,
    UNCOMMENT_PRINT,
    UNCOMMENT_ALL,
    UNCOMMENT_ALL_PRINT,
)
