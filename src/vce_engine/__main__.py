from vce_engine.adapters.textual.app import main

main()
