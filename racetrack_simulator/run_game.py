from pathlib import Path

from racetrack_simulator.ai.move_sources import HoldStillSource, plan_with_search
from racetrack_simulator.core.grid import load_track, render_board
from racetrack_simulator.engine.logging import configure_logging
from racetrack_simulator.engine.turn_engine import TurnEngine

TRACK = Path(__file__).resolve().parents[1] / "tracks" / "quarter_mile.txt"

if __name__ == "__main__":
    configure_logging()
    grid = load_track(TRACK)
    eng = TurnEngine.for_grid(grid)

    sources = []
    for vehicle in eng.state.vehicles:
        plan, _ = plan_with_search(grid, eng.state.vehicles, vehicle.idx)
        sources.append(plan or HoldStillSource())

    eng.run_race(sources)
    print(render_board(grid, eng.state.vehicles))
