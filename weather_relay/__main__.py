from weather_relay.main import main

main()
