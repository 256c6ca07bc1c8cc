import os
import logging
from benchmarks.systems.pendulum import run_statistical_benchmark as run_pendulum

logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s')


def main():
    print("Starting PID Controller Experiments")
    os.makedirs("benchmarks/results", exist_ok=True)

    print("\nRunning Pendulum Benchmark...")
    run_pendulum(output_dir="benchmarks/results")

    print("\nExperiments completed. Results and plots saved in benchmarks/results/.")

if __name__ == "__main__":
    main()
