#!/usr/bin/env python3
"""
Run All Demos - Launcher for the filter and PID demonstrations.
"""

import sys
import importlib
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))


DEMOS = {
    '1': ('examples.demo_filters', 'Tustin Filter Demo'),
    '2': ('examples.demo_pid', 'PID Controller Demo'),
}


def print_header():
    """Print welcome header."""
    print("\n" + "=" * 70)
    print("   TUSTIN CONTROL LIBRARY - DEMONSTRATION SUITE")
    print("=" * 70)


def print_menu():
    """Print demo menu."""
    print("\nAvailable Demonstrations:")
    print("-" * 40)
    print("  1. Tustin Filter Demo")
    print("     - Shape catalog")
    print("     - Step responses and notch Bode plot")
    print("     - On-the-fly retuning")
    print()
    print("  2. PID Controller Demo")
    print("     - Ideal vs. standard form")
    print("     - Integration schemes")
    print("     - Stop-driven anti-windup")
    print()
    print("  3. Run ALL demos")
    print("  0. Exit")
    print("-" * 40)


def run_demo(choice: str) -> bool:
    """Run a specific demo."""
    if choice not in DEMOS:
        print("Invalid selection.")
        return False

    module_name, title = DEMOS[choice]

    print(f"\n{'=' * 70}")
    print(f"   Running: {title}")
    print('=' * 70)

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        print(f"Failed to import demo: {e}")
        print("Make sure all dependencies are installed: pip install -e .")
        return False

    module.main()
    return True


def run_all_demos():
    """Run all demos in sequence."""
    print("\nNote: Close each plot window to proceed to the next demo.\n")
    for choice in DEMOS:
        run_demo(choice)
        print("\n" + "-" * 70)


def main():
    """Main entry point."""
    print_header()
    Path("output").mkdir(exist_ok=True)

    while True:
        print_menu()
        choice = input("\nEnter your choice (0-3): ").strip()

        if choice == '0':
            print("\nGoodbye.\n")
            break
        elif choice == '3':
            run_all_demos()
        elif choice in DEMOS:
            run_demo(choice)
        else:
            print("\nInvalid choice. Please enter 0-3.")


if __name__ == "__main__":
    main()
