from slidedeck.main_asyncio import run

run()
