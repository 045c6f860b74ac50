from rclonekit.cli.cli import main

main()
