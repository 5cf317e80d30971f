from memprobe.run_probe import run

if __name__ == "__main__":
    run()
