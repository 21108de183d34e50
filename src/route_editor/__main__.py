from src.route_editor.cli import main

main()
