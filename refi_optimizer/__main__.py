from refi_optimizer.cli import main

raise SystemExit(main())
