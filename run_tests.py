#!/usr/bin/env python3
"""
Main test runner for pyscanner tests.

Author: xwest
"""

import sys
import os
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)


def run_all_tests():
    """Run all pyscanner tests."""

    print("🚀 pyscanner Test Suite")
    print("=" * 60)

    # Test if basic imports work
    try:
        from pyscanner import tokenize, OPERATORS

        print("✅ All lexer modules imported successfully")
        print()

    except ImportError as e:
        print(f"❌ Failed to import lexer modules: {e}")
        return False

    # Smoke test on a small program
    print("Testing a small program...")
    code = "def add(a, b):\n    return a + b  # sum\n\nprint(f'{add(1, 2)} {OPERATORS!r}')\n"
    try:
        tokens = tokenize(code)
        print(f"     Generated {len(tokens)} tokens")
        print("  ✅ Smoke test passed")
    except Exception as e:
        print(f"  ❌ Smoke test failed: {e}")
        return False
    print()

    # Discover and run the unit tests
    loader = unittest.TestLoader()
    suite = loader.discover(os.path.join(project_root, "tests"), pattern="test_*.py")
    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    print("\n" + "=" * 60)
    if result.wasSuccessful():
        print("✅ All tests passed!")
    else:
        print("❌ Some tests failed.")
        print(f"Failures: {len(result.failures)}")
        print(f"Errors: {len(result.errors)}")

    return result.wasSuccessful()


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
