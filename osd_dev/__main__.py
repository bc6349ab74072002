from osd_dev.cli.main import main

raise SystemExit(main())
