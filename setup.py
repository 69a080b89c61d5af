"""
Setup script for Speedy.

Usage:
    pip install -e .[test]       # development install
    python setup.py py2app       # build the macOS application bundle

The bundled app will be in the 'dist' folder.
"""
import sys

from setuptools import setup

APP = ['speedy.py']
DATA_FILES = []

OPTIONS = {
    'argv_emulation': False,
    'plist': {
        'CFBundleName': 'Speedy',
        'CFBundleDisplayName': 'Speedy',
        'CFBundleIdentifier': 'com.speedy.app',
        'CFBundleVersion': '1.0.0',
        'CFBundleShortVersionString': '1.0.0',
        'LSMinimumSystemVersion': '10.14.0',
        'LSUIElement': True,  # Hide dock icon (menu bar app)
        'NSHighResolutionCapable': True,
    },
    'packages': [
        # Our packages
        'monitor',
        'storage',
        'config',
        'app',
    ],
    'includes': [
        'rumps',
        'psutil',
        'objc',
        'Foundation',
        'AppKit',
    ],
    'excludes': [
        'tkinter',
        'pytest',
        'pip',
    ],
    'site_packages': True,
}

py2app_kwargs = {}
if 'py2app' in sys.argv:
    py2app_kwargs = dict(
        app=APP,
        data_files=DATA_FILES,
        options={'py2app': OPTIONS},
        setup_requires=['py2app'],
    )

setup(
    name='speedy',
    version='1.0.0',
    description='macOS menu bar network throughput monitor',
    python_requires='>=3.9',
    packages=['app', 'app.views', 'config', 'monitor', 'storage'],
    py_modules=['speedy'],
    install_requires=[
        'psutil>=5.9',
        'rumps>=0.4; sys_platform == "darwin"',
        'pyobjc-framework-Cocoa>=9.0; sys_platform == "darwin"',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    entry_points={
        'console_scripts': ['speedy=speedy:main'],
    },
    **py2app_kwargs,
)
