from archinstall_hooks.main import main

raise SystemExit(main())
