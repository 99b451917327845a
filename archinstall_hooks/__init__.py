from archinstall_hooks.hooks import apply_hook as apply_hook
from archinstall_hooks.hooks import validate_hook as validate_hook
from archinstall_hooks.main import main as main
from archinstall_hooks.shared import Caller as Caller
