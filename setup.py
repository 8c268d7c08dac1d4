from setuptools import setup, find_namespace_packages

setup(
  name="vitalsampen",
  version="0.1.0",
  description="Sample entropy of blood pressure waveforms for large cohorts",
  license="MIT",
  packages=find_namespace_packages(include=["vitalsampen", "vitalsampen.*"]),
  python_requires=">=3.9",
  install_requires=[
    "numpy",
    "pandas",
    "joblib>=1.4",
    "tqdm",
    "psutil",
  ],
  extras_require={
    "test": ["pytest", "scipy"],
  },
  entry_points={
    "console_scripts": ["vitalsampen=vitalsampen.cli:main"],
  },
)
