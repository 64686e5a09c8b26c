from setuptools import setup

requirements = [
    "PyQt5",
    "requests",
]

test_requirements = [
    "pytest",
    "pytest-qt",
]

setup(
    name="donation_tracker",
    version="0.1.0",
    description="Progress, countdown and donor lists for a spreadsheet-backed fundraiser",
    packages=[
        "donation_tracker",
        "donation_tracker.widgets",
        "donation_tracker.tests",
    ],
    entry_points={
        "console_scripts": [
            "DonationTracker=donation_tracker.donation_tracker:main"
        ]
    },
    install_requires=requirements,
    extras_require={"test": test_requirements},
    python_requires=">=3.8",
    zip_safe=False,
    keywords="donation_tracker",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
