from lightning_nodes.cli.main import main

main()
