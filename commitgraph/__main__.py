from commitgraph.cli import main

raise SystemExit(main())
