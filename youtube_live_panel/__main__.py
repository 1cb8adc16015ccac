from youtube_live_panel.panel import main

main()
