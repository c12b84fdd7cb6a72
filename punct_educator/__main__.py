from punct_educator.cli import main

raise SystemExit(main())
