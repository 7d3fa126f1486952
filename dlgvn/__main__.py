from dlgvn.cli import main

raise SystemExit(main())
